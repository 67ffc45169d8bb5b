from dataclasses import dataclass


@dataclass
class PaymentOrder:
    order_id: str
    amount: int
    currency: str = "INR"
    fee_record_id: str = None
    room_type: str = None

    @classmethod
    def from_response(cls, body, room_type=None):
        """Build an order from either backend shape.

        Hostel endpoints nest the gateway order under ``order``; course-fee
        endpoints return ``orderId``/``feeRecordId`` at the top level.
        """
        order = body.get("order") or {}
        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        source = order or data or body
        order_id = source.get("id") or source.get("orderId") or body.get("orderId")
        if not order_id:
            raise ValueError("Payment order response carries no order id")
        return cls(
            order_id=order_id,
            amount=source.get("amount") or body.get("amount") or 0,
            currency=source.get("currency") or body.get("currency") or "INR",
            fee_record_id=source.get("feeRecordId") or body.get("feeRecordId"),
            room_type=body.get("roomType") or room_type,
        )

    def to_checkout(self, key, name, description, prefill=None):
        return {
            "key": key,
            "amount": self.amount,
            "currency": self.currency,
            "name": name,
            "description": description,
            "order_id": self.order_id,
            "prefill": prefill or {},
            "theme": {"color": "#3B82F6"},
        }
