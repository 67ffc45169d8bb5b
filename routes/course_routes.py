from flask import Blueprint, render_template

from services.registry import get_stores
from utils.decorators import student_required

course_bp = Blueprint("course", __name__)


@course_bp.route("/course")
@student_required
def course_details():
    store = get_stores().course
    store.fetch()
    return render_template(
        "course.html",
        course=store.course,
        teachers=store.teachers,
        error=store.error,
    )
