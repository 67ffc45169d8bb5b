import logging

from flask import Blueprint, render_template, request, jsonify, redirect, url_for, flash, send_file
from flask_login import current_user

from services.api_client import ApiError
from services.hostel_service import ROOM_FEES
from services.payment_service import CONTACT_SUPPORT_MESSAGE, checkout_options, refresh_until_reflected
from services.receipt_service import hostel_invoice_data, render_hostel_invoice
from services.registry import get_stores
from utils.decorators import student_required

logger = logging.getLogger(__name__)

hostel_bp = Blueprint("hostel", __name__)


@hostel_bp.route("/hostel")
@student_required
def hostel():
    store = get_stores().hostel
    store.fetch()
    errors = [store.error] if store.error else []
    store.fetch_payment_history()
    if store.error:
        errors.append(store.error)

    pending = None
    if current_user.wants_hostel and not store.is_allocated:
        pending = store.check_pending_payment()

    return render_template(
        "hostel.html",
        hostel=store.hostel,
        history=store.payment_history or [],
        pending=pending,
        room_fees=ROOM_FEES,
        wants_hostel=current_user.wants_hostel,
        errors=errors,
        tab=request.args.get("tab", "details"),
    )


@hostel_bp.route("/hostel/pay", methods=["POST"])
@student_required
def start_payment():
    store = get_stores().hostel
    data = request.get_json(silent=True) or {}
    room_type = data.get("room_type") or "Normal"

    if room_type not in ROOM_FEES:
        return jsonify({"error": "Invalid room type"}), 400

    try:
        order = None
        if data.get("resume"):
            pending = store.check_pending_payment()
            if pending:
                order = pending["order"]
                room_type = pending.get("room_type") or room_type
        if order is None:
            order = store.create_payment_order(room_type)
    except ApiError as exc:
        return jsonify({"error": exc.message or "Failed to create payment order"}), 502
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 502

    options = checkout_options(
        order,
        name="University Hostel",
        description=f"Hostel Fees - {room_type} Room",
        user=current_user,
    )
    return jsonify({"status": "success", "options": options, "room_type": room_type})


@hostel_bp.route("/hostel/pay/verify", methods=["POST"])
@student_required
def verify_payment():
    store = get_stores().hostel
    data = request.get_json(silent=True) or {}
    payment_id = data.get("razorpay_payment_id")

    try:
        store.verify_payment(
            data.get("razorpay_order_id"),
            payment_id,
            data.get("razorpay_signature"),
            room_type=data.get("room_type"),
        )
    except ApiError as exc:
        logger.error("hostel payment %s failed verification: %s", payment_id, exc.message)
        return jsonify({"error": CONTACT_SUPPORT_MESSAGE, "detail": exc.message}), 400

    def refresh():
        store.fetch()
        store.fetch_payment_history()

    refresh_until_reflected(refresh, lambda: store.find_payment(payment_id) is not None)
    flash("Payment successful! Admin has been notified for room allocation.", "success")
    return jsonify({"status": "success", "redirect": url_for("hostel.hostel", tab="history")})


@hostel_bp.route("/hostel/receipt/<payment_id>")
@student_required
def download_receipt(payment_id):
    store = get_stores().hostel
    store.fetch()
    store.fetch_payment_history()

    payment = store.find_payment(payment_id)
    if not payment:
        flash("Payment not found", "danger")
        return redirect(url_for("hostel.hostel", tab="history"))

    buffer, filename = render_hostel_invoice(
        hostel_invoice_data(payment, store.hostel, current_user.profile)
    )
    return send_file(buffer, as_attachment=True, download_name=filename, mimetype="application/pdf")
