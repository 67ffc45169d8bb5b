import logging

from flask import Blueprint, render_template, request, jsonify, redirect, url_for, flash, send_file
from flask_login import current_user

from services.api_client import ApiError
from services.payment_service import CONTACT_SUPPORT_MESSAGE, checkout_options, refresh_until_reflected
from services.receipt_service import course_fee_invoice_data, render_course_fee_receipt
from services.registry import get_stores
from utils.decorators import student_required

logger = logging.getLogger(__name__)

course_fee_bp = Blueprint("course_fees", __name__)


def _load_fees(store):
    errors = []
    for fetch in (store.fetch_fee_status, store.fetch_yearwise_structure,
                  store.fetch_pending_fees, store.fetch_payment_history):
        fetch()
        if store.error and store.error not in errors:
            errors.append(store.error)
    return errors


@course_fee_bp.route("/course-fees")
@student_required
def course_fees():
    store = get_stores().course_fees
    errors = _load_fees(store)
    yearwise = store.yearwise or {}
    return render_template(
        "course_fees.html",
        fee_status=store.fee_status,
        yearwise=yearwise,
        years=sorted((yearwise.get("yearwiseFees") or {}).items()),
        student=yearwise.get("student") or {},
        pending_fees=store.pending_fees or [],
        history=store.payment_history,
        errors=errors,
        tab=request.args.get("tab", "fees"),
    )


@course_fee_bp.route("/course-fees/pay", methods=["POST"])
@student_required
def start_payment():
    store = get_stores().course_fees
    academic_year = (request.get_json(silent=True) or {}).get("academic_year")
    if not academic_year:
        return jsonify({"error": "academic_year required"}), 400

    store.fetch_yearwise_structure()
    if store.yearwise is None:
        return jsonify({"error": store.error or "Fee status not loaded"}), 502

    try:
        order = store.create_payment_order(academic_year)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    except ApiError as exc:
        return jsonify({"error": exc.message or "Failed to initiate payment"}), 502

    options = checkout_options(
        order,
        name="University Course Fees",
        description=f"Course fees for {academic_year}",
        user=current_user,
    )
    return jsonify({
        "status": "success",
        "options": options,
        "fee_record_id": order.fee_record_id,
    })


@course_fee_bp.route("/course-fees/pay/verify", methods=["POST"])
@student_required
def verify_payment():
    store = get_stores().course_fees
    data = request.get_json(silent=True) or {}
    payment_id = data.get("razorpay_payment_id")

    try:
        store.verify_payment(
            data.get("razorpay_order_id"),
            payment_id,
            data.get("razorpay_signature"),
            data.get("fee_record_id"),
        )
    except ApiError as exc:
        logger.error("course fee payment %s failed verification: %s", payment_id, exc.message)
        return jsonify({"error": CONTACT_SUPPORT_MESSAGE, "detail": exc.message}), 400

    def refresh():
        store.fetch_yearwise_structure()
        store.fetch_payment_history()

    refresh_until_reflected(refresh, lambda: store.find_payment(payment_id) is not None)
    flash("Payment successful!", "success")
    return jsonify({"status": "success", "redirect": url_for("course_fees.course_fees", tab="history")})


@course_fee_bp.route("/course-fees/receipt/<payment_id>")
@student_required
def download_receipt(payment_id):
    store = get_stores().course_fees
    store.fetch_yearwise_structure()
    store.fetch_payment_history()

    payment = store.find_payment(payment_id)
    if not payment or store.yearwise is None:
        flash("Failed to generate PDF invoice", "danger")
        return redirect(url_for("course_fees.course_fees", tab="history"))

    data = course_fee_invoice_data(
        payment,
        store.year(payment.get("academicYear")),
        store.yearwise.get("student"),
    )
    buffer, filename = render_course_fee_receipt(data)
    return send_file(buffer, as_attachment=True, download_name=filename, mimetype="application/pdf")
