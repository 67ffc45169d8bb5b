import logging
import math
from datetime import datetime

from models.payment import PaymentOrder
from services.api_client import ApiError
from services.base_store import BaseStore

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD_DAYS = 30


def _parse_date(value):
    if not value:
        return None
    text = str(value).replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text[:10])
        except ValueError:
            return None
    return parsed.replace(tzinfo=None)


def calculate_overdue_info(due_date, grace_period_days=DEFAULT_GRACE_PERIOD_DAYS, now=None):
    """Classify a due date as on time, in grace, or overdue.

    A fee is only overdue once the grace period after the due date is over;
    inside the grace window it is flagged separately.
    """
    due = _parse_date(due_date)
    if due is None:
        return {"is_overdue": False, "overdue_days": 0, "is_in_grace_period": False}

    now = now or datetime.now()
    days_past_due = math.ceil((now - due).total_seconds() / 86400)
    is_past_due = now > due
    return {
        "is_overdue": is_past_due and days_past_due > grace_period_days,
        "overdue_days": max(0, days_past_due),
        "is_in_grace_period": is_past_due and days_past_due <= grace_period_days,
    }


def process_yearwise_fees(fee_status, now=None):
    yearwise = (fee_status or {}).get("yearwiseFees") or {}
    penalty_config = ((fee_status or {}).get("feeStructureInfo") or {}).get("penaltyConfig") or {}
    grace = penalty_config.get("gracePeriodDays") or DEFAULT_GRACE_PERIOD_DAYS

    for year_data in yearwise.values():
        info = calculate_overdue_info(year_data.get("dueDate"), grace, now=now)
        is_overdue = info["is_overdue"] and year_data.get("paymentStatus") != "paid"

        year_data["isOverdue"] = is_overdue
        year_data["overdueDays"] = info["overdue_days"]
        year_data["isInGracePeriod"] = info["is_in_grace_period"]
        year_data["gracePeriodDays"] = grace
        year_data["canPay"] = bool(year_data.get("canPay")) and not is_overdue
        year_data["canPayOverdue"] = is_overdue
        if is_overdue and year_data.get("paymentStatus") == "not_paid":
            year_data["paymentStatus"] = "overdue"
    return fee_status


def normalize_history(history):
    """Coerce the history payload into ``{all, paid, due, pending, summary}``."""
    if isinstance(history, list):
        history = {
            "all": history,
            "paid": [r for r in history if r.get("paymentStatus") == "paid"],
            "due": [r for r in history if r.get("paymentStatus") in ("overdue", "failed")],
            "pending": [r for r in history if r.get("paymentStatus") in ("pending", "partial")],
        }
    history = dict(history or {})
    for key in ("all", "paid", "due", "pending"):
        history[key] = history.get(key) or []

    if not history.get("summary"):
        history["summary"] = {
            "totalRecords": len(history["all"]),
            "paidCount": len(history["paid"]),
            "dueCount": len(history["due"]),
            "pendingCount": len(history["pending"]),
            "totalPaidAmount": sum(r.get("finalAmount") or 0 for r in history["paid"]),
            "totalDueAmount": sum(r.get("finalAmount") or 0 for r in history["due"]),
        }
    return history


class CourseFeeStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.fee_status = None
        self.yearwise = None
        self.pending_fees = None
        self.payment_history = None
        self.is_loading_history = False
        self.is_loading_pending = False

    def fetch_fee_status(self):
        self.is_loading = True
        self.error = None
        try:
            self.fee_status = self._get_data(
                "/api/course-fees/status", "Failed to fetch fee status"
            )
        except ApiError as exc:
            self.fee_status = None
            self.error = exc.message
        finally:
            self.is_loading = False

    def fetch_yearwise_structure(self):
        self.is_loading = True
        self.error = None
        try:
            data = self._get_data(
                "/api/course-fees/yearwise-structure", "Failed to fetch fee structure"
            )
            self.yearwise = process_yearwise_fees(data)
        except ApiError as exc:
            self.yearwise = None
            self.error = exc.message
        finally:
            self.is_loading = False

    def fetch_pending_fees(self):
        self.is_loading_pending = True
        self.error = None
        try:
            data = self._get_data("/api/course-fees/pending", "Failed to fetch pending fees")
            fees = data if isinstance(data, list) else []
            for fee in fees:
                fee["finalAmount"] = fee.get("finalAmount") or fee.get("amount") or 0
                fee["penalty"] = fee.get("penalty") or 0
                fee["discount"] = fee.get("discount") or 0
            self.pending_fees = fees
        except ApiError as exc:
            self.pending_fees = None
            self.error = exc.message
        finally:
            self.is_loading_pending = False

    def fetch_payment_history(self):
        self.is_loading_history = True
        self.error = None
        try:
            data = self._get_data(
                "/api/course-fees/history", "Failed to fetch payment history",
                allow_not_found=True,
            )
            self.payment_history = normalize_history(data) if data is not None else None
        except ApiError as exc:
            self.payment_history = None
            self.error = exc.message
        finally:
            self.is_loading_history = False

    def year(self, academic_year):
        return ((self.yearwise or {}).get("yearwiseFees") or {}).get(academic_year)

    def find_payment(self, payment_id):
        for record in (self.payment_history or {}).get("all", []):
            if record.get("razorpayPaymentId") == payment_id:
                return record
        return None

    def create_payment_order(self, academic_year):
        year_data = self.year(academic_year)
        if not year_data or (year_data.get("pendingAmount") or 0) <= 0:
            raise ValueError("No pending fees to pay for this year")

        course_name = (((self.yearwise or {}).get("student") or {}).get("course") or {}).get("name", "")
        self.error = None
        body = self._send(
            "POST", "/api/course-fees/create-order", "Failed to create payment order",
            json={
                "feeType": "yearly",
                "amount": year_data["pendingAmount"],
                "academicYear": academic_year,
                "description": f"Course fees for {academic_year} - {course_name}".rstrip(" -"),
            },
        )
        return PaymentOrder.from_response(body)

    def verify_payment(self, order_id, payment_id, signature, fee_record_id):
        self.error = None
        return self._send(
            "POST", "/api/course-fees/verify-payment", "Failed to verify payment",
            json={
                "razorpay_order_id": order_id,
                "razorpay_payment_id": payment_id,
                "razorpay_signature": signature,
                "feeRecordId": fee_record_id,
            },
        )

    def clear(self):
        self.fee_status = None
        self.yearwise = None
        self.pending_fees = None
        self.payment_history = None
        self.error = None
        self.is_loading = False
        self.is_loading_history = False
        self.is_loading_pending = False
