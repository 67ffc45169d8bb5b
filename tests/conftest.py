"""
Student Portal - Test Configuration and Fixtures
"""
from urllib.parse import urlsplit

import pytest
import requests

from app import create_app
from config.config import TestingConfig
from services.api_client import ApiClient

STUDENT = {
    "_id": "stu-1",
    "name": "Asha Verma",
    "email": "asha@example.edu",
    "rollno": 221001,
    "phone": "9876543210",
    "address": "12 MG Road, Rewari",
    "dob": "2004-05-17T00:00:00.000Z",
    "gender": "Female",
    "isPwd": False,
    "category": "General",
    "nationality": "Indian",
    "bloodGroup": "O+",
    "aadharNumber": "123412341234",
    "fatherName": "Ravi Verma",
    "motherName": "Sunita Verma",
    "want_to_apply_for_hostel": False,
    "courseId": {"_id": "c-1", "name": "B.Tech CSE", "department": "CSE", "school": "Engineering"},
}

NEW_STUDENT = {
    "_id": "stu-2",
    "name": "Karan Singh",
    "email": "karan@example.edu",
    "rollno": 221002,
}


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeBackend:
    """Stands in for the ERP backend by routing on method and path.

    A route's body may be a callable taking the request kwargs, which lets a
    test change answers between calls. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, body=None, status=200):
        self.routes[(method.upper(), path)] = (status, body)

    def fail(self, method, path, exc):
        self.routes[(method.upper(), path)] = (None, exc)

    def handle(self, method, url, **kwargs):
        key = (method.upper(), urlsplit(url).path)
        self.calls.append((key[0], key[1], kwargs))
        if key not in self.routes:
            return FakeResponse(404, {"status": False, "message": "Route not found"})
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        if callable(body):
            status, body = body(kwargs)
        return FakeResponse(status, body)

    def called(self, method, path):
        return [c for c in self.calls if c[0] == method.upper() and c[1] == path]


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()

    def fake_request(session, method, url, **kwargs):
        return fake.handle(method, url, **kwargs)

    monkeypatch.setattr(requests.Session, "request", fake_request)
    return fake


@pytest.fixture
def api_client(backend):
    return ApiClient(TestingConfig.BACKEND_BASE_URL)


@pytest.fixture
def app(backend):
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, backend, profile):
    backend.on("GET", "/api/auth/check-auth", {"status": True, "data": dict(profile)})
    with client.session_transaction() as sess:
        sess["_user_id"] = profile["_id"]
        sess["_fresh"] = True
    return client


@pytest.fixture
def student_client(client, backend):
    """Test client whose backend session belongs to a student with a complete profile"""
    return sign_in(client, backend, STUDENT)


@pytest.fixture
def new_student_client(client, backend):
    """Test client for a student who has not filled in their profile yet"""
    return sign_in(client, backend, NEW_STUDENT)
