"""
Unit Tests for the domain containers
"""
import pytest

from services.api_client import ApiError
from services.auth_service import AuthStore, validate_login, validate_sign_up
from services.course_service import CourseStore
from services.exam_service import ExamStore, ExamValidationError, validate_exam_form
from services.hostel_service import ROOM_FEES, HostelStore
from services.registry import StoreRegistry
from services.timetable_service import TimetableStore
from models.exam import ExamFormStatus


class TestFetchContract:
    """A failed fetch leaves data empty and error set; a good one clears the error"""

    def test_failed_fetch_sets_error(self, api_client, backend):
        store = CourseStore(api_client)
        backend.on("GET", "/api/course", {"message": "Course not assigned"}, status=500)
        store.fetch()
        assert store.course is None
        assert store.error == "Course not assigned"
        assert store.is_loading is False

    def test_fallback_message_when_backend_is_silent(self, api_client, backend):
        store = CourseStore(api_client)
        backend.on("GET", "/api/course", None, status=502)
        store.fetch()
        assert store.error == "An error occurred while fetching course data"

    def test_success_replaces_previous_state(self, api_client, backend):
        store = CourseStore(api_client)
        store.error = "stale"
        backend.on("GET", "/api/course", {"status": True, "data": {
            "name": "B.Tech CSE",
            "assignedTeachers": [{"name": "Dr. Rao", "email": "rao@example.edu"}],
        }})
        store.fetch()
        assert store.error is None
        assert store.course["name"] == "B.Tech CSE"
        assert store.teachers[0]["name"] == "Dr. Rao"

    def test_repeat_fetch_gives_same_state(self, api_client, backend):
        store = CourseStore(api_client)
        backend.on("GET", "/api/course", {"status": True, "data": {
            "name": "B.Tech CSE",
            "assignedTeachers": [{"name": "Dr. Rao", "email": "rao@example.edu"}],
        }})
        store.fetch()
        first = (store.course, store.error, store.teachers)
        store.fetch()
        assert (store.course, store.error, store.teachers) == first
        assert len(backend.called("GET", "/api/course")) == 2

    def test_failed_refetch_clears_previous_data(self, api_client, backend):
        store = CourseStore(api_client)
        backend.on("GET", "/api/course", {"status": True, "data": {"name": "B.Tech CSE"}})
        store.fetch()
        assert store.course["name"] == "B.Tech CSE"
        backend.on("GET", "/api/course", {"message": "Server error"}, status=500)
        store.fetch()
        assert store.course is None
        assert store.teachers == []
        assert store.error == "Server error"


class TestNotFoundAsEmpty:

    def test_hostel_without_allocation(self, api_client, backend):
        store = HostelStore(api_client)
        store.fetch()
        assert store.hostel is None
        assert store.error is None
        assert not store.is_allocated

    def test_hostel_history_without_payments(self, api_client, backend):
        store = HostelStore(api_client)
        store.fetch_payment_history()
        assert store.payment_history is None
        assert store.error is None

    def test_hostel_server_error_is_reported(self, api_client, backend):
        store = HostelStore(api_client)
        backend.on("GET", "/api/hostel", None, status=500)
        store.fetch()
        assert store.error == "Failed to fetch hostel details"

    def test_course_is_not_lenient(self, api_client, backend):
        store = CourseStore(api_client)
        store.fetch()
        assert store.error == "Route not found"


class TestAuthStore:

    def test_login_keeps_user(self, api_client, backend):
        backend.on("POST", "/api/auth/login", {"status": True, "data": {"email": "a@b.co"}})
        store = AuthStore(api_client)
        store.login("221001", "a@b.co", "secret1")
        assert store.auth_user == {"email": "a@b.co"}
        assert backend.called("POST", "/api/auth/login")[0][2]["json"] == {
            "rollno": "221001", "email": "a@b.co", "password": "secret1",
        }

    def test_failed_login_raises(self, api_client, backend):
        backend.on("POST", "/api/auth/login", {"status": False, "message": "Invalid credentials"}, status=401)
        store = AuthStore(api_client)
        with pytest.raises(ApiError):
            store.login("221001", "a@b.co", "wrong")
        assert store.error == "Invalid credentials"
        assert store.auth_user is None

    def test_check_auth_failure_clears_user(self, api_client, backend):
        store = AuthStore(api_client)
        store.auth_user = {"email": "old@b.co"}
        assert store.check_auth() is None
        assert store.auth_user is None

    def test_logout_clears_even_when_backend_fails(self, api_client, backend):
        backend.on("POST", "/api/auth/logout", None, status=500)
        api_client.session.cookies.set("jwt", "abc")
        store = AuthStore(api_client)
        store.auth_user = {"email": "a@b.co"}
        with pytest.raises(ApiError):
            store.logout()
        assert store.auth_user is None
        assert api_client.export_cookies() == {}

    def test_permission_status_prefers_permission_data(self, api_client, backend):
        backend.on("GET", "/api/auth/update-permission-status", {
            "status": True, "permissionData": {"status": "requested"},
        })
        assert AuthStore(api_client).get_update_permission_status() == {"status": "requested"}

    def test_validation_messages(self):
        assert validate_login("12", "bad", "abc") == [
            "Roll number should be at least 3 characters",
            "Please enter a valid email address",
            "Password should be at least 3 characters",
        ]
        assert validate_login("221001", "a@b.co", "abcd") == []
        assert validate_login("  1234 ", "a@b.co", "abcd") == []
        assert validate_login("123", "a@b.co", "abcd") == ["Roll number should be at least 3 characters"]
        assert "Passwords do not match" in validate_sign_up("Al", "a@b.co", "secret1", "secret2", "c-1")
        assert validate_sign_up("Al", "a@b.co", "secret1", "secret1", "c-1") == []


class TestHostelStore:

    def test_create_order_sends_room_fee(self, api_client, backend):
        backend.on("POST", "/api/payment/create-order", {
            "success": True, "order": {"id": "order_1", "amount": 1200000, "currency": "INR"},
        })
        order = HostelStore(api_client).create_payment_order("AC")
        assert order.order_id == "order_1"
        assert order.room_type == "AC"
        sent = backend.called("POST", "/api/payment/create-order")[0][2]["json"]
        assert sent == {"amount": ROOM_FEES["AC"], "roomType": "AC"}

    def test_unknown_room_type(self, api_client, backend):
        with pytest.raises(ValueError):
            HostelStore(api_client).create_payment_order("Deluxe")
        assert backend.calls == []

    def test_pending_payment_found(self, api_client, backend):
        backend.on("GET", "/api/payment/check-pending", {
            "success": True,
            "hasPendingPayment": True,
            "order": {"id": "order_9", "amount": 800000},
            "roomType": "Normal",
            "paymentAmount": 8000,
        })
        pending = HostelStore(api_client).check_pending_payment()
        assert pending["order"].order_id == "order_9"
        assert pending["room_type"] == "Normal"
        assert pending["amount"] == 8000

    def test_pending_payment_failure_means_nothing_to_resume(self, api_client, backend):
        backend.on("GET", "/api/payment/check-pending", None, status=500)
        assert HostelStore(api_client).check_pending_payment() is None

    def test_find_payment(self, api_client, backend):
        store = HostelStore(api_client)
        store.payment_history = [{"razorpayPaymentId": "pay_1"}, {"paymentId": "pay_2"}]
        assert store.find_payment("pay_2") == {"paymentId": "pay_2"}
        assert store.find_payment("pay_3") is None


class TestTimetableStore:

    def test_days_in_week_order(self, api_client, backend):
        backend.on("GET", "/api/academics/timetable", {"status": True, "data": {
            "semester": 3,
            "schedule": [
                {"day": "Wednesday", "periods": [{"time": "10:00"}]},
                {"day": "Monday", "periods": []},
            ],
        }})
        store = TimetableStore(api_client)
        store.fetch()
        assert [day for day, _ in store.periods_by_day()] == ["Monday", "Wednesday"]


class TestExam:

    def test_validate_exam_form(self):
        assert validate_exam_form("3", "2025-2026", "Regular", "June-July") == {
            "semester": 3,
            "currentSession": "2025-2026",
            "type": "Regular",
            "month": "June-July",
        }

    @pytest.mark.parametrize("semester,exam_type,month", [
        ("9", "Regular", "June-July"),
        ("", "Regular", "June-July"),
        ("2", "Supplementary", "June-July"),
        ("2", "Backlog", "December"),
    ])
    def test_invalid_exam_form(self, semester, exam_type, month):
        with pytest.raises(ExamValidationError):
            validate_exam_form(semester, "2025-2026", exam_type, month)

    def test_fetch_picks_submitted_form(self, api_client, backend):
        backend.on("GET", "/api/exam/details", {"status": True, "data": [
            {"semester": 2, "examRegistration": {"isSubmitted": False}},
            {"semester": 3, "examRegistration": {"isSubmitted": True, "isVerified": True}},
        ]})
        store = ExamStore(api_client)
        store.fetch()
        assert store.exam_form["semester"] == 3
        assert store.is_submitted
        assert store.form_status() is ExamFormStatus.VERIFIED

    def test_hall_ticket_status(self):
        form = {"examRegistration": {"isSubmitted": True, "isVerified": True, "hallTicketAvailable": True}}
        assert ExamStore(None).form_status(form) is ExamFormStatus.HALL_TICKET_AVAILABLE

    def test_invalid_submission_makes_no_request(self, api_client, backend):
        with pytest.raises(ExamValidationError):
            ExamStore(api_client).submit_exam_form("0", "2025-2026", "Regular", "June-July")
        assert backend.calls == []


class TestStoreRegistry:

    def test_clear_resets_every_container(self, api_client):
        stores = StoreRegistry(api_client)
        stores.auth.auth_user = {"email": "a@b.co"}
        stores.course.course = {"name": "x"}
        stores.hostel.hostel = {"allocated": True}
        stores.bus_pass.has_applied = True
        stores.exam.exam_form = {"semester": 1}
        stores.clear()
        assert stores.auth.auth_user is None
        assert stores.course.course is None
        assert stores.hostel.hostel is None
        assert stores.bus_pass.has_applied is False
        assert stores.exam.exam_form is None
