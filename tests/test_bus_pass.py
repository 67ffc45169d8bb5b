"""
Unit Tests for bus pass eligibility and the bus pass container
"""
from datetime import date

import pytest

from models.user import PortalUser
from services.bus_pass_service import (
    BusPassStore,
    BusPassValidationError,
    calculate_age,
    validate_distance,
)


class TestValidateDistance:

    def test_accepts_short_distance(self):
        assert validate_distance("12.5") == 12.5

    @pytest.mark.parametrize("raw,message", [
        ("60", "not eligible"),
        ("75", "not eligible"),
        ("-1", "cannot be negative"),
        ("abc", "valid distance"),
        ("", "valid distance"),
        (None, "valid distance"),
    ])
    def test_rejects(self, raw, message):
        with pytest.raises(BusPassValidationError) as exc_info:
            validate_distance(raw)
        assert message in str(exc_info.value)


class TestCalculateAge:

    def test_before_birthday(self):
        assert calculate_age("2004-05-17", today=date(2024, 5, 16)) == 19

    def test_on_birthday(self):
        assert calculate_age("2004-05-17T00:00:00.000Z", today=date(2024, 5, 17)) == 20

    def test_missing_or_bad(self):
        assert calculate_age(None) is None
        assert calculate_age("not a date") is None


class TestBusPassStore:

    def test_not_applied_keeps_hostel_flags(self, api_client, backend):
        backend.on("GET", "/api/hostel/my-bus-pass", {
            "status": False, "data": {"want_to_apply_for_hostel": True},
        }, status=404)
        store = BusPassStore(api_client)
        store.fetch()
        assert store.error is None
        assert store.has_applied is False
        assert store.is_form_disabled(PortalUser({"email": "a@b.co"}))
        assert "hostel accommodation" in store.disabled_message()

    def test_applied(self, api_client, backend):
        backend.on("GET", "/api/hostel/my-bus-pass", {
            "status": True, "data": {"distanceFromHomeInKms": 20, "status": "pending"},
        })
        store = BusPassStore(api_client)
        store.fetch()
        assert store.has_applied
        assert store.disabled_message() == "You have already applied for a bus pass."

    def test_eligible_student_form_enabled(self, api_client, backend):
        backend.on("GET", "/api/hostel/my-bus-pass", {"status": False, "data": {}})
        store = BusPassStore(api_client)
        store.fetch()
        assert not store.is_form_disabled(PortalUser({"email": "a@b.co"}))
        assert store.disabled_message() is None

    def test_invalid_distance_never_reaches_backend(self, api_client, backend):
        store = BusPassStore(api_client)
        with pytest.raises(BusPassValidationError):
            store.apply_for_bus_pass("60")
        assert backend.called("POST", "/api/hostel/apply-bus-pass") == []

    def test_apply(self, api_client, backend):
        backend.on("POST", "/api/hostel/apply-bus-pass", {
            "status": True, "data": {"distanceFromHomeInKms": 15, "status": "pending"},
        })
        store = BusPassStore(api_client)
        store.apply_for_bus_pass("15")
        assert store.has_applied
        assert backend.called("POST", "/api/hostel/apply-bus-pass")[0][2]["json"] == {
            "distanceFromHomeInKms": 15.0,
        }
