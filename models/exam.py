from enum import Enum

SEMESTERS = [1, 2, 3, 4, 5, 6, 7, 8]
EXAM_TYPES = ["Regular", "Backlog"]
EXAM_MONTHS = ["June-July", "September-November"]


class ExamFormStatus(str, Enum):
    NOT_SUBMITTED = "not_submitted"
    SUBMITTED = "submitted"
    VERIFIED = "verified"
    HALL_TICKET_AVAILABLE = "hall_ticket_available"

    @property
    def label(self):
        return {
            "not_submitted": "Not Submitted",
            "submitted": "Submitted - Awaiting Verification",
            "verified": "Verified",
            "hall_ticket_available": "Hall Ticket Available",
        }[self.value]
