import logging

from models.payment import PaymentOrder
from services.api_client import ApiError
from services.base_store import BaseStore

logger = logging.getLogger(__name__)

# Yearly hostel fee per room type, in INR
ROOM_FEES = {
    "Normal": 8000,
    "AC": 12000,
}


class HostelStore(BaseStore):
    """Hostel allocation, hostel payment history and hostel payments.

    ``/api/hostel`` and ``/api/hostel/payment-history`` answer 404 until the
    student has an allocation or a payment; that is an empty state, not an
    error.
    """

    def __init__(self, client):
        super().__init__(client)
        self.hostel = None
        self.payment_history = None
        self.pending_payment = None
        self.is_loading_history = False

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            self.hostel = self._get_data(
                "/api/hostel", "Failed to fetch hostel details", allow_not_found=True
            )
        except ApiError as exc:
            self.hostel = None
            self.error = exc.message
        finally:
            self.is_loading = False

    def fetch_payment_history(self):
        self.is_loading_history = True
        self.error = None
        try:
            history = self._get_data(
                "/api/hostel/payment-history",
                "Failed to fetch hostel payment history",
                allow_not_found=True,
            )
            self.payment_history = history or None
        except ApiError as exc:
            self.payment_history = None
            self.error = exc.message
        finally:
            self.is_loading_history = False

    @property
    def is_allocated(self):
        return bool(self.hostel and self.hostel.get("allocated"))

    def find_payment(self, payment_id):
        for entry in self.payment_history or []:
            if payment_id in (entry.get("razorpayPaymentId"), entry.get("paymentId")):
                return entry
        return None

    def check_pending_payment(self):
        """Look for an unfinished hostel order that can be resumed.

        Failures here only mean "nothing to resume"; the page still offers a
        fresh payment.
        """
        try:
            body = self.client.get("/api/payment/check-pending")
        except ApiError as exc:
            logger.info("pending payment check failed: %s", exc.message)
            self.pending_payment = None
            return None

        if body.get("success") and body.get("hasPendingPayment") and body.get("order"):
            self.pending_payment = {
                "order": PaymentOrder.from_response(body),
                "room_type": body.get("roomType"),
                "amount": body.get("paymentAmount"),
            }
        else:
            self.pending_payment = None
        return self.pending_payment

    def create_payment_order(self, room_type):
        if room_type not in ROOM_FEES:
            raise ValueError(f"Unknown room type: {room_type}")
        self.error = None
        body = self._send(
            "POST", "/api/payment/create-order", "Failed to create payment order",
            json={"amount": ROOM_FEES[room_type], "roomType": room_type},
        )
        return PaymentOrder.from_response(body, room_type=room_type)

    def verify_payment(self, order_id, payment_id, signature, room_type=None):
        self.error = None
        body = self._send(
            "POST", "/api/payment/verify", "Payment verification failed",
            json={
                "razorpay_order_id": order_id,
                "razorpay_payment_id": payment_id,
                "razorpay_signature": signature,
                "roomType": room_type,
            },
        )
        self.pending_payment = None
        return body

    def clear(self):
        self.hostel = None
        self.payment_history = None
        self.pending_payment = None
        self.error = None
        self.is_loading = False
        self.is_loading_history = False
