import logging

from flask import Blueprint, request, render_template, redirect, url_for, session, flash
from flask_login import login_user, logout_user, current_user

from models.user import PortalUser
from services.api_client import ApiError
from services.auth_service import validate_login, validate_sign_up
from services.profile_service import is_first_time_user
from services.registry import get_stores

logger = logging.getLogger(__name__)

# Define the blueprint
auth_bp = Blueprint("auth", __name__)


def _safe_next(target):
    # Only same-site relative paths
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return None


def _start_session(profile):
    stores = get_stores()
    if not isinstance(profile, dict) or not profile:
        profile = stores.auth.check_auth()
    if not profile:
        return False
    login_user(PortalUser(profile))
    return True


# =========================================================
# LOGIN ROUTE
# =========================================================
@auth_bp.route("/sign-in", methods=["GET", "POST"])
def login():
    if request.method == "GET" and current_user.is_authenticated:
        return redirect(url_for("dashboard.home"))

    if request.method == "POST":
        rollno = (request.form.get("rollno") or "").strip()
        email = (request.form.get("email") or "").strip()
        password = request.form.get("password") or ""

        # 1. Basic Validation
        errors = validate_login(rollno, email, password)
        if errors:
            return render_template("login.html", errors=errors, email=email, rollno=rollno)

        # 2. Authenticate against the backend
        stores = get_stores()
        try:
            body = stores.auth.login(rollno, email, password)
        except ApiError as exc:
            return render_template("login.html", errors=[exc.message], email=email, rollno=rollno)

        # 3. Log the user in with Flask-Login
        if not _start_session(body.get("data")):
            return render_template("login.html", errors=["Login failed"], email=email, rollno=rollno)

        flash("Signed in successfully.", "success")
        if is_first_time_user(stores.auth.auth_user):
            return redirect(url_for("profile.complete_profile"))
        return redirect(_safe_next(request.args.get("next")) or url_for("dashboard.home"))

    return render_template("login.html", errors=[])


# =========================================================
# SIGN-UP ROUTE
# =========================================================
@auth_bp.route("/sign-up", methods=["GET", "POST"])
def sign_up():
    stores = get_stores()
    courses = stores.auth.fetch_signup_courses()
    if stores.auth.error:
        flash(stores.auth.error, "danger")

    if request.method == "POST":
        form = request.form
        name = (form.get("name") or "").strip()
        email = (form.get("email") or "").strip()
        course_id = form.get("courseId") or ""

        errors = validate_sign_up(
            name, email, form.get("password"), form.get("confirmPassword"), course_id
        )
        if errors:
            return render_template("sign_up.html", courses=courses, errors=errors, form=form)

        try:
            body = stores.auth.sign_up(name, email, form.get("password"), course_id)
        except ApiError as exc:
            return render_template(
                "sign_up.html", courses=courses, form=form,
                errors=[exc.message or "Please try again or contact support if the problem persists."],
            )

        flash("Account created successfully!", "success")
        if _start_session(body.get("data")):
            return redirect(url_for("profile.complete_profile"))
        return redirect(url_for("auth.login"))

    return render_template("sign_up.html", courses=courses, errors=[], form={})


# =========================================================
# LOGOUT ROUTE
# =========================================================
@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    stores = get_stores()
    try:
        stores.auth.logout()
    except ApiError as exc:
        logger.warning("backend logout failed: %s", exc.message)
    stores.clear()
    logout_user()      # Tell Flask-Login to wipe the user session
    session.clear()    # Wipe the stored backend cookies too
    return redirect(url_for("auth.login"))
