from models.exam import EXAM_MONTHS, EXAM_TYPES, SEMESTERS, ExamFormStatus
from services.api_client import ApiError
from services.base_store import BaseStore


class ExamValidationError(ValueError):
    pass


def form_status(form):
    """Collapse the registration flags into a single display state."""
    registration = (form or {}).get("examRegistration") or {}
    if not registration.get("isSubmitted"):
        return ExamFormStatus.NOT_SUBMITTED
    if registration.get("hallTicketAvailable"):
        return ExamFormStatus.HALL_TICKET_AVAILABLE
    if registration.get("isVerified"):
        return ExamFormStatus.VERIFIED
    return ExamFormStatus.SUBMITTED


def validate_exam_form(semester, current_session, exam_type, month):
    try:
        semester = int(semester)
    except (TypeError, ValueError):
        raise ExamValidationError("Please select a semester")
    if semester not in SEMESTERS:
        raise ExamValidationError("Please select a semester")
    if exam_type not in EXAM_TYPES:
        raise ExamValidationError("Please select an exam type")
    if month not in EXAM_MONTHS:
        raise ExamValidationError("Please select an exam month")
    if not current_session:
        raise ExamValidationError("Session is required")
    return {
        "semester": semester,
        "currentSession": current_session,
        "type": exam_type,
        "month": month,
    }


class ExamStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.exam_form = None
        self.exam_forms = None

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            forms = self._get_data("/api/exam/details", "Failed to fetch exam form details")
        except ApiError as exc:
            self.exam_form = None
            self.exam_forms = None
            self.error = exc.message
        else:
            forms = forms or []
            self.exam_forms = forms
            self.exam_form = next(
                (f for f in forms if (f.get("examRegistration") or {}).get("isSubmitted")),
                None,
            )
        finally:
            self.is_loading = False

    @property
    def is_submitted(self):
        return form_status(self.exam_form) is not ExamFormStatus.NOT_SUBMITTED

    def submit_exam_form(self, semester, current_session, exam_type, month):
        payload = validate_exam_form(semester, current_session, exam_type, month)
        self.is_loading = True
        self.error = None
        try:
            body = self._send("POST", "/api/exam/submit", "Failed to submit exam form", json=payload)
        finally:
            self.is_loading = False
        self.exam_form = body.get("data")
        return body

    def form_status(self, form=None):
        return form_status(form if form is not None else self.exam_form)

    def clear(self):
        self.exam_form = None
        self.exam_forms = None
        self.error = None
        self.is_loading = False
