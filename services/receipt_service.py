from datetime import datetime
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models.invoice import CourseFeeInvoiceData, HostelInvoiceData

UNIVERSITY_LINES = [
    "CENTRAL UNIVERSITY OF HARYANA",
    "NAAC Accredited 'A' Grade University",
    "Mahendergarh, Haryana - 123031, India",
]


def payment_suffix(payment_id):
    return (payment_id or "")[-8:]


def course_fee_receipt_filename(academic_year, payment_id):
    return f"course-fee-receipt-{academic_year}-{payment_suffix(payment_id)}.pdf"


def hostel_invoice_filename(academic_year, payment_id):
    return f"hostel-invoice-{academic_year}-{payment_suffix(payment_id)}.pdf"


def academic_year_for(value):
    """Academic year ("2024-2025") a payment date falls in; years start in July."""
    try:
        when = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (TypeError, ValueError):
        when = datetime.now()
    start = when.year if when.month >= 7 else when.year - 1
    return f"{start}-{start + 1}"


def money(amount):
    amount = amount or 0
    if float(amount).is_integer():
        return f"Rs. {int(amount):,}"
    return f"Rs. {amount:,.2f}"


def format_date(value):
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%d %b %Y")
    except (TypeError, ValueError):
        return str(value or "--")


def _table(rows, header=True, col_widths=None):
    table = Table(rows, colWidths=col_widths, repeatRows=1 if header else 0)
    style = [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
    ]
    if header:
        style += [
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    table.setStyle(TableStyle(style))
    return table


def _build(title, details, items, totals, notes):
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=30, rightMargin=30, topMargin=30, bottomMargin=30)
    styles = getSampleStyleSheet()

    elements = [Paragraph(title, styles["Title"])]
    elements += [Paragraph(line, styles["Normal"]) for line in UNIVERSITY_LINES]
    elements.append(Spacer(1, 12))
    elements.append(_table(details, header=False, col_widths=[140, 340]))
    elements.append(Spacer(1, 12))
    elements.append(_table(items, col_widths=[340, 140]))
    elements.append(Spacer(1, 6))
    elements.append(_table(totals, header=False, col_widths=[340, 140]))
    elements.append(Spacer(1, 18))
    elements += [Paragraph(note, styles["Italic"]) for note in notes]

    doc.build(elements)
    buffer.seek(0)
    return buffer


def render_course_fee_receipt(data: CourseFeeInvoiceData):
    """Render a course-fee payment receipt and return ``(buffer, filename)``."""
    details = [
        ["Student", data.student_name],
        ["Roll No", data.roll_number],
        ["Email", data.email],
        ["Course", data.course],
        ["Department", data.department],
        ["School", data.school],
        ["Receipt Number", f"CF-{payment_suffix(data.payment_id).upper()}"],
        ["Payment Date", format_date(data.payment_date)],
        ["Academic Year", data.academic_year],
    ]
    items = [["Fee Type", "Amount"]] + [[label, money(amount)] for label, amount in data.breakdown]
    totals = [["Subtotal", money(data.subtotal)]]
    if data.discount > 0:
        totals.append(["Discount", f"-{money(data.discount)}"])
    if data.late_fee > 0:
        totals.append(["Late Fee", f"+{money(data.late_fee)}"])
    totals.append(["Total", money(data.total)])
    totals.append(["Amount Paid", money(data.payment_amount)])

    buffer = _build(
        "Payment Receipt", details, items, totals,
        [
            "This is a computer-generated receipt for your course fee payment.",
            f"Payment ID: {data.payment_id}. For any queries, please contact the accounts department.",
        ],
    )
    return buffer, course_fee_receipt_filename(data.academic_year, data.payment_id)


def render_hostel_invoice(data: HostelInvoiceData):
    details = [
        ["Billed To", data.student_name],
        ["Roll No", data.roll_number],
        ["Email", data.email],
        ["Course", data.course],
        ["Department", data.department],
        ["Room", data.room_number],
        ["Hostel", data.hostel_name],
        ["Invoice Number", f"INV-{payment_suffix(data.payment_id).upper()}"],
        ["Date Issued", format_date(data.payment_date)],
        ["Academic Year", data.academic_year],
    ]
    items = [
        ["Description", "Amount"],
        ["Hostel Fee", money(data.hostel_fee)],
        ["Maintenance Fee", money(data.maintenance_fee)],
        ["Security Deposit", money(data.security_deposit)],
    ]
    totals = [["Subtotal", money(data.subtotal)]]
    if data.discount > 0:
        totals.append(["Discount", f"-{money(data.discount)}"])
    if data.tax > 0:
        totals.append(["Tax", f"+{money(data.tax)}"])
    totals.append(["Total", money(data.total)])
    totals.append(["Amount Paid", money(data.payment_amount)])

    buffer = _build(
        "Invoice", details, items, totals,
        [
            "Thank you for your payment! This invoice serves as your official receipt for hostel fee payment.",
            f"Payment ID: {data.payment_id}. For any queries, please contact the hostel administration.",
        ],
    )
    return buffer, hostel_invoice_filename(data.academic_year, data.payment_id)


def course_fee_invoice_data(payment, year_data, student):
    """Flatten a history record, its year and the student into receipt data."""
    breakdown = (year_data or {}).get("feeBreakdown") or {}
    course = (student or {}).get("course") or {}
    return CourseFeeInvoiceData(
        payment_id=payment.get("razorpayPaymentId") or "",
        academic_year=payment.get("academicYear") or "",
        student_name=(student or {}).get("name") or "",
        roll_number=str((student or {}).get("rollno") or ""),
        email=(student or {}).get("email") or "",
        course=course.get("name") or "",
        department=course.get("department") or "N/A",
        school=course.get("school") or "N/A",
        payment_amount=payment.get("finalAmount") or payment.get("amount") or 0,
        payment_date=payment.get("paidDate") or datetime.now().isoformat(),
        tuition_fee=breakdown.get("tuitionFee") or 0,
        lab_fee=breakdown.get("labFee") or 0,
        library_fee=breakdown.get("libraryFee") or 0,
        exam_fee=breakdown.get("examFee") or 0,
        development_fee=breakdown.get("developmentFee") or 0,
        other_fees=breakdown.get("otherFees") or 0,
        discount=payment.get("discount") or 0,
        late_fee=payment.get("lateFee") or payment.get("penalty") or 0,
    )


def hostel_invoice_data(payment, hostel, profile):
    profile = profile or {}
    hostel = hostel or {}
    course = profile.get("courseId") if isinstance(profile.get("courseId"), dict) else {}
    paid_on = payment.get("paidAt") or payment.get("createdAt") or datetime.now().isoformat()
    amount = payment.get("amount") or payment.get("paymentAmount") or 0
    return HostelInvoiceData(
        payment_id=payment.get("razorpayPaymentId") or payment.get("paymentId") or "",
        academic_year=payment.get("academicYear") or academic_year_for(paid_on),
        student_name=profile.get("name") or "",
        roll_number=str(profile.get("rollno") or ""),
        email=profile.get("email") or "",
        course=course.get("name") or "",
        department=course.get("department") or "N/A",
        room_number=hostel.get("roomNumber") or "--",
        hostel_name=hostel.get("hostelName") or "--",
        payment_amount=amount,
        payment_date=paid_on,
        hostel_fee=amount,
    )
