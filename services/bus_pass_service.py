from datetime import date, datetime

from services.api_client import ApiError
from services.base_store import BaseStore

# Students at or beyond this distance are expected to take a hostel room
MAX_BUS_PASS_DISTANCE_KM = 60


class BusPassValidationError(ValueError):
    pass


def validate_distance(raw):
    """Parse the distance field and enforce the eligibility window.

    Runs before any request is made, so an invalid value never reaches the
    backend.
    """
    try:
        distance = float(str(raw).strip())
    except (TypeError, ValueError):
        raise BusPassValidationError("Please enter a valid distance")
    if distance != distance:
        raise BusPassValidationError("Please enter a valid distance")
    if distance < 0:
        raise BusPassValidationError("Distance cannot be negative")
    if distance >= MAX_BUS_PASS_DISTANCE_KM:
        raise BusPassValidationError(
            f"Students living {MAX_BUS_PASS_DISTANCE_KM} km or more from the "
            "university are not eligible for a bus pass"
        )
    return distance


def calculate_age(dob, today=None):
    if not dob:
        return None
    try:
        born = datetime.fromisoformat(str(dob)[:10]).date()
    except ValueError:
        return None
    today = today or date.today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


class BusPassStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.bus_pass = None
        self.has_applied = False
        self.hostel_info = None
        self.is_applying = False

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            body = self.client.get("/api/hostel/my-bus-pass")
        except ApiError as exc:
            self.bus_pass = None
            self.has_applied = False
            if exc.not_found:
                # No application yet; the 404 body still carries hostel flags
                self.hostel_info = exc.payload.get("data")
            else:
                self.error = exc.message or "Failed to fetch bus pass data"
            return
        finally:
            self.is_loading = False

        data = body.get("data") or {}
        if body.get("status"):
            self.bus_pass = data
            self.has_applied = True
            self.hostel_info = {
                "want_to_apply_for_hostel": data.get("want_to_apply_for_hostel"),
                "hostel_allocated": data.get("hostel_allocated"),
            }
        else:
            self.bus_pass = None
            self.has_applied = False
            self.hostel_info = data or None

    def apply_for_bus_pass(self, distance_km):
        distance = validate_distance(distance_km)
        self.is_applying = True
        self.error = None
        try:
            body = self._send(
                "POST", "/api/hostel/apply-bus-pass", "Failed to apply for bus pass",
                json={"distanceFromHomeInKms": distance},
            )
        finally:
            self.is_applying = False
        self.bus_pass = body.get("data")
        self.has_applied = True
        return body

    def _hostel_flags(self):
        bus_pass = self.bus_pass or {}
        info = self.hostel_info or {}
        wants = bus_pass.get("want_to_apply_for_hostel") or info.get("want_to_apply_for_hostel")
        allocated = bus_pass.get("hostel_allocated") or info.get("hostel_allocated")
        return bool(wants), bool(allocated)

    def is_form_disabled(self, user):
        if user is None:
            return True
        if self.has_applied and self.bus_pass:
            return True
        wants, allocated = self._hostel_flags()
        return wants or allocated

    def disabled_message(self):
        if self.has_applied and self.bus_pass:
            return "You have already applied for a bus pass."
        wants, allocated = self._hostel_flags()
        if wants:
            return "You have applied for hostel accommodation, so you cannot apply for a bus pass."
        if allocated:
            return "You have been allocated a hostel room, so you cannot apply for a bus pass."
        return None

    def reset_error(self):
        self.error = None
