import logging
import re

from services.api_client import ApiError
from services.base_store import BaseStore

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_login(rollno, email, password):
    errors = []
    if len((rollno or "").strip()) <= 3:
        errors.append("Roll number should be at least 3 characters")
    if not EMAIL_RE.match(email or ""):
        errors.append("Please enter a valid email address")
    if len(password or "") <= 3:
        errors.append("Password should be at least 3 characters")
    return errors


def validate_sign_up(name, email, password, confirm_password, course_id):
    errors = []
    if len((name or "").strip()) < 2:
        errors.append("Name should not be blank and should be at least 2 characters")
    if not EMAIL_RE.match(email or ""):
        errors.append("Please enter a valid email address")
    if len(password or "") < 6:
        errors.append("Password should be at least 6 characters")
    if not confirm_password or password != confirm_password:
        errors.append("Passwords do not match")
    if not course_id:
        errors.append("Please select a course")
    return errors


class AuthStore(BaseStore):
    """Session and profile actions against ``/api/auth``."""

    def __init__(self, client):
        super().__init__(client)
        self.auth_user = None
        self.is_checking_auth = False
        self.signup_courses = []

    def login(self, rollno, email, password):
        body = self._send(
            "POST", "/api/auth/login", "Login failed",
            json={"rollno": rollno, "email": email, "password": password},
        )
        self.auth_user = body.get("data")
        return body

    def sign_up(self, name, email, password, course_id):
        body = self._send(
            "POST", "/api/auth/sign-up", "Signup failed",
            json={"name": name, "email": email, "password": password, "courseId": course_id},
        )
        self.auth_user = body.get("data")
        return body

    def logout(self):
        try:
            self._send("POST", "/api/auth/logout", "Logout failed", json={})
        finally:
            # The local session goes away whether or not the backend agreed
            self.auth_user = None
            self.client.clear_cookies()

    def check_auth(self):
        self.is_checking_auth = True
        try:
            self.auth_user = self._get_data("/api/auth/check-auth", "Not authenticated")
        except ApiError as exc:
            logger.debug("auth check failed: %s", exc.message)
            self.auth_user = None
        finally:
            self.is_checking_auth = False
        return self.auth_user

    def fetch_signup_courses(self):
        self.is_loading = True
        self.error = None
        try:
            self.signup_courses = self._get_data(
                "/api/course/signup-courses",
                "Failed to load courses. Please refresh the page.",
            ) or []
        except ApiError as exc:
            self.signup_courses = []
            self.error = exc.message
        finally:
            self.is_loading = False
        return self.signup_courses

    def get_update_permission_status(self):
        body = self._send("GET", "/api/auth/update-permission-status", "Failed to fetch permission status")
        return body.get("permissionData") or body.get("data") or {}

    def request_update_permission(self, payload):
        return self._send(
            "POST", "/api/auth/request-update-permission",
            "Failed to send permission request", json=payload,
        )

    def update_personal_details(self, fields, photo=None):
        files = None
        if photo is not None:
            files = {"photo": (photo.filename, photo.stream, photo.mimetype)}
        body = self._send(
            "PUT", "/api/auth/update-personal-details",
            "Failed to update profile. Please try again.",
            data=fields, files=files,
        )
        if isinstance(body.get("data"), dict):
            self.auth_user = body["data"]
        return body
