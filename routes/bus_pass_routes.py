from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import current_user

from services.api_client import ApiError
from services.bus_pass_service import BusPassValidationError, calculate_age
from services.registry import get_stores
from utils.decorators import student_required

bus_pass_bp = Blueprint("bus_pass", __name__)


@bus_pass_bp.route("/bus-pass", methods=["GET", "POST"])
@student_required
def bus_pass():
    store = get_stores().bus_pass
    store.fetch()

    if request.method == "POST":
        if store.is_form_disabled(current_user):
            flash(store.disabled_message() or "You cannot apply for a bus pass.", "warning")
            return redirect(url_for("bus_pass.bus_pass"))
        try:
            store.apply_for_bus_pass(request.form.get("distanceFromHomeInKms"))
        except BusPassValidationError as exc:
            flash(str(exc), "danger")
        except ApiError as exc:
            flash(exc.message or "Failed to apply for bus pass", "danger")
        else:
            flash("Bus pass application submitted successfully!", "success")
            return redirect(url_for("bus_pass.bus_pass", tab="status"))
    elif store.error:
        flash(store.error, "danger")

    return render_template(
        "bus_pass.html",
        profile=current_user.profile,
        age=calculate_age(current_user.profile.get("dob")),
        bus_pass=store.bus_pass,
        has_applied=store.has_applied,
        form_disabled=store.is_form_disabled(current_user),
        disabled_message=store.disabled_message(),
        tab=request.args.get("tab", "application"),
    )
