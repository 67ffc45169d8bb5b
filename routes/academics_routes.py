from flask import Blueprint, render_template

from services.registry import get_stores
from utils.decorators import student_required

academics_bp = Blueprint("academics", __name__)


@academics_bp.route("/attendance")
@student_required
def attendance():
    store = get_stores().attendance
    store.fetch()
    return render_template("attendance.html", semesters=store.semesters, error=store.error)


@academics_bp.route("/marks")
@student_required
def marks():
    store = get_stores().marks
    store.fetch()
    return render_template("marks.html", semesters=store.semesters, error=store.error)


@academics_bp.route("/timetable")
@student_required
def timetable():
    store = get_stores().timetable
    store.fetch()
    return render_template(
        "timetable.html",
        timetable=store.timetable,
        days=store.periods_by_day(),
        error=store.error,
    )
