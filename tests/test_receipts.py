"""
Unit Tests for receipt and invoice rendering
"""
from services.receipt_service import (
    academic_year_for,
    course_fee_invoice_data,
    course_fee_receipt_filename,
    hostel_invoice_data,
    render_course_fee_receipt,
    render_hostel_invoice,
)
from tests.conftest import STUDENT

YEAR_DATA = {
    "feeBreakdown": {"tuitionFee": 40000, "labFee": 3000, "libraryFee": 1000, "examFee": 1000},
}
FEE_STUDENT = {
    "name": "Asha Verma",
    "rollno": 221001,
    "email": "asha@example.edu",
    "course": {"name": "B.Tech CSE", "department": "CSE", "school": "Engineering"},
}


class TestFilenames:

    def test_course_fee_filename_uses_last_eight(self):
        assert course_fee_receipt_filename("2024-2025", "pay_ABCDEFGH12345678") == (
            "course-fee-receipt-2024-2025-12345678.pdf"
        )

    def test_short_payment_id_suffix(self):
        assert course_fee_receipt_filename("2024-2025", "pay_abcd1234") == "course-fee-receipt-2024-2025-abcd1234.pdf"

    def test_academic_year_starts_in_july(self):
        assert academic_year_for("2024-07-01T00:00:00Z") == "2024-2025"
        assert academic_year_for("2025-03-15") == "2024-2025"


class TestCourseFeeReceipt:

    def test_invoice_data(self):
        payment = {"razorpayPaymentId": "pay_1", "academicYear": "2024-2025", "finalAmount": 45000, "penalty": 500}
        data = course_fee_invoice_data(payment, YEAR_DATA, FEE_STUDENT)
        assert data.subtotal == 45000
        assert data.late_fee == 500
        assert data.total == 45500
        assert data.roll_number == "221001"

    def test_renders_pdf(self):
        payment = {
            "razorpayPaymentId": "pay_Nx81kq2ZPq7w3m",
            "academicYear": "2024-2025",
            "finalAmount": 45000,
            "paidDate": "2024-08-02T10:00:00Z",
        }
        buffer, filename = render_course_fee_receipt(course_fee_invoice_data(payment, YEAR_DATA, FEE_STUDENT))
        assert buffer.read(4) == b"%PDF"
        assert filename == "course-fee-receipt-2024-2025-2ZPq7w3m.pdf"


class TestHostelInvoice:

    def test_renders_pdf(self):
        payment = {"razorpayPaymentId": "pay_HOSTEL12345678", "amount": 8000, "paidAt": "2024-09-10T08:00:00Z"}
        data = hostel_invoice_data(payment, {"roomNumber": "B-204", "hostelName": "Aravali"}, STUDENT)
        assert data.academic_year == "2024-2025"
        assert data.course == "B.Tech CSE"
        buffer, filename = render_hostel_invoice(data)
        assert buffer.read(4) == b"%PDF"
        assert filename == "hostel-invoice-2024-2025-12345678.pdf"
