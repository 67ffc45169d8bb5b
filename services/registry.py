from flask import current_app, g, session

from services.api_client import ApiClient
from services.attendance_service import AttendanceStore
from services.auth_service import AuthStore
from services.bus_pass_service import BusPassStore
from services.course_fee_service import CourseFeeStore
from services.course_service import CourseStore
from services.exam_service import ExamStore
from services.hostel_service import HostelStore
from services.marks_service import MarksStore
from services.timetable_service import TimetableStore

COOKIE_SESSION_KEY = "backend_cookies"


class StoreRegistry:
    """The nine domain containers sharing one backend client."""

    def __init__(self, client):
        self.client = client
        self.auth = AuthStore(client)
        self.course = CourseStore(client)
        self.hostel = HostelStore(client)
        self.bus_pass = BusPassStore(client)
        self.course_fees = CourseFeeStore(client)
        self.attendance = AttendanceStore(client)
        self.marks = MarksStore(client)
        self.timetable = TimetableStore(client)
        self.exam = ExamStore(client)

    def clear(self):
        for store in (self.course, self.hostel, self.course_fees, self.attendance,
                      self.marks, self.timetable, self.exam):
            store.clear()
        self.bus_pass = BusPassStore(self.client)
        self.auth.auth_user = None


def build_client():
    return ApiClient(
        current_app.config["BACKEND_BASE_URL"],
        cookies=session.get(COOKIE_SESSION_KEY),
        timeout=current_app.config["API_TIMEOUT"],
    )


def get_stores():
    """Containers for the current request, created on first use."""
    if "stores" not in g:
        g.stores = StoreRegistry(build_client())
    return g.stores


def persist_cookies(response):
    # Login/logout change the backend cookie jar; keep the session in step
    stores = g.get("stores")
    if stores is not None:
        cookies = stores.client.export_cookies()
        if cookies:
            session[COOKIE_SESSION_KEY] = cookies
        else:
            session.pop(COOKIE_SESSION_KEY, None)
    return response
