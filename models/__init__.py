from .user import PortalUser
from .student import ProfileField, REQUIRED_PROFILE_FIELDS
from .attendance import SemesterAttendance
from .marks import SemesterMarks
from .permission import FieldChangeRequest, PermissionStatus
from .payment import PaymentOrder
from .invoice import HostelInvoiceData, CourseFeeInvoiceData
from .exam import ExamFormStatus
__all__ = ["PortalUser", "ProfileField", "REQUIRED_PROFILE_FIELDS", "SemesterAttendance", "SemesterMarks", "FieldChangeRequest", "PermissionStatus", "PaymentOrder", "HostelInvoiceData", "CourseFeeInvoiceData", "ExamFormStatus"]
