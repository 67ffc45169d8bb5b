from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app

from models.exam import EXAM_MONTHS, EXAM_TYPES, SEMESTERS
from services.api_client import ApiError
from services.exam_service import ExamValidationError
from services.registry import get_stores
from utils.decorators import student_required

exam_bp = Blueprint("exam", __name__)


@exam_bp.route("/exam", methods=["GET", "POST"])
@student_required
def exam_form():
    store = get_stores().exam
    session_label = current_app.config["EXAM_SESSION"]

    if request.method == "POST":
        try:
            store.submit_exam_form(
                request.form.get("semester"),
                session_label,
                request.form.get("type"),
                request.form.get("month"),
            )
        except ExamValidationError as exc:
            flash(str(exc), "danger")
        except ApiError as exc:
            flash(exc.message or "Failed to submit exam form", "danger")
        else:
            flash("Exam form submitted successfully!", "success")
            return redirect(url_for("exam.exam_form", tab="records"))

    store.fetch()
    return render_template(
        "exam.html",
        exam_form=store.exam_form,
        exam_forms=store.exam_forms or [],
        status=store.form_status(),
        form_status=store.form_status,
        error=store.error,
        tab=request.args.get("tab", "form"),
        semesters=SEMESTERS,
        exam_types=EXAM_TYPES,
        exam_months=EXAM_MONTHS,
        session_label=session_label,
    )
