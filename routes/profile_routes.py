import logging

from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from flask_login import current_user

from models.permission import PermissionStatus
from models.student import BLOOD_GROUPS, CATEGORIES, GENDERS, ProfileField
from services.api_client import ApiError
from services.profile_service import (
    PermissionRequestError,
    PermissionRequestForm,
    fields_editable,
    is_first_time_user,
    profile_form_fields,
    validate_profile_form,
)
from services.registry import get_stores
from utils.decorators import student_required

logger = logging.getLogger(__name__)

profile_bp = Blueprint("profile", __name__)

FIRST_TIME_SESSION_KEY = "profile_first_time"


def _permission_info(stores, first_time):
    if first_time:
        return {"status": PermissionStatus.NONE.value}
    try:
        return stores.auth.get_update_permission_status() or {}
    except ApiError as exc:
        # Unknown status keeps the fields locked
        logger.info("permission status unavailable: %s", exc.message)
        return {"status": PermissionStatus.NONE.value}


def _render(profile, first_time, permission, request_form=None, errors=None, values=None):
    status = PermissionStatus.parse(permission.get("status"))
    if request_form is None:
        request_form = PermissionRequestForm(profile)
    if status is PermissionStatus.REQUESTED:
        request_form.is_locked = True
        request_form.status = status
    return render_template(
        "complete_profile.html",
        profile=profile,
        values=values or profile,
        first_time=first_time,
        permission=permission,
        permission_status=status.value,
        editable=fields_editable(first_time, status.value),
        request_form=request_form,
        profile_fields=list(ProfileField),
        errors=errors or {},
        genders=GENDERS,
        categories=CATEGORIES,
        blood_groups=BLOOD_GROUPS,
    )


@profile_bp.route("/complete-profile", methods=["GET"])
@student_required
def complete_profile():
    profile = current_user.profile
    # Decided once per page load; posts from this page reuse it
    first_time = is_first_time_user(profile)
    session[FIRST_TIME_SESSION_KEY] = first_time
    permission = _permission_info(get_stores(), first_time)
    return _render(profile, first_time, permission)


@profile_bp.route("/complete-profile", methods=["POST"])
@student_required
def save_profile():
    stores = get_stores()
    profile = current_user.profile
    first_time = session.get(FIRST_TIME_SESSION_KEY)
    if first_time is None:
        first_time = is_first_time_user(profile)
        session[FIRST_TIME_SESSION_KEY] = first_time

    permission = _permission_info(stores, first_time)
    if not fields_editable(first_time, permission.get("status")):
        flash("You need admin permission to update your profile.", "warning")
        return redirect(url_for("profile.complete_profile"))

    photo = request.files.get("photo")
    if photo is not None and not photo.filename:
        photo = None
    errors = validate_profile_form(request.form, photo)
    if errors:
        flash(next(iter(errors.values())), "danger")
        return _render(profile, first_time, permission, errors=errors, values=request.form)

    try:
        stores.auth.update_personal_details(profile_form_fields(request.form), photo)
    except ApiError as exc:
        if exc.payload.get("needsPermission"):
            flash("Admin permission is required to update your profile.", "warning")
            return redirect(url_for("profile.complete_profile"))
        errors = {"submit": exc.message or "Failed to update profile. Please try again."}
        flash(errors["submit"], "danger")
        return _render(profile, first_time, permission, errors=errors, values=request.form)

    if first_time:
        flash("Profile completed successfully!", "success")
    else:
        flash("Profile updated successfully!", "success")
    session.pop(FIRST_TIME_SESSION_KEY, None)
    return redirect(url_for("dashboard.home"))


@profile_bp.route("/complete-profile/permission", methods=["POST"])
@student_required
def permission_request():
    stores = get_stores()
    profile = current_user.profile
    first_time = bool(session.get(FIRST_TIME_SESSION_KEY))
    if first_time:
        return redirect(url_for("profile.complete_profile"))

    permission = _permission_info(stores, first_time)
    try:
        request_form = PermissionRequestForm.from_form(profile, request.form)
    except ValueError as exc:
        flash(str(exc), "danger")
        return redirect(url_for("profile.complete_profile"))

    action = request.form.get("action", "")
    if action == "add_field":
        request_form.add_field()
    elif action.startswith("remove_field:"):
        try:
            index = int(action.split(":", 1)[1])
        except ValueError:
            index = -1
        if 0 <= index < len(request_form.requested_changes):
            request_form.remove_field(index)
    elif action == "submit":
        if PermissionStatus.parse(permission.get("status")) is PermissionStatus.REQUESTED:
            flash("Your permission request is pending admin approval.", "info")
            return redirect(url_for("profile.complete_profile"))
        try:
            request_form.submit(stores.auth)
        except PermissionRequestError as exc:
            flash(str(exc), "danger")
        except ApiError as exc:
            flash(exc.message or "Failed to send permission request", "danger")
        else:
            flash("Permission request sent to admin successfully!", "success")
            return redirect(url_for("profile.complete_profile"))

    return _render(profile, first_time, permission, request_form=request_form)
