from flask import Blueprint, render_template
from flask_login import current_user

from services.profile_service import empty_required_fields, is_first_time_user
from services.registry import get_stores
from utils.decorators import student_required

dashboard_bp = Blueprint("dashboard", __name__)

NAV_ITEMS = [
    ("dashboard.home", "Profile"),
    ("course.course_details", "Course"),
    ("academics.attendance", "Attendance"),
    ("academics.marks", "Marks"),
    ("academics.timetable", "Timetable"),
    ("exam.exam_form", "Exam Form"),
    ("course_fees.course_fees", "Course Fees"),
    ("hostel.hostel", "Hostel"),
    ("bus_pass.bus_pass", "Bus Pass"),
]


@dashboard_bp.app_context_processor
def inject_navigation():
    return {"nav_items": NAV_ITEMS}


@dashboard_bp.route("/")
@student_required
def home():
    profile = current_user.profile
    stores = get_stores()
    stores.course.fetch()
    return render_template(
        "dashboard.html",
        profile=profile,
        course=stores.course.course,
        missing_fields=empty_required_fields(profile),
        first_time=is_first_time_user(profile),
    )
