"""Profile completion and the update-permission workflow.

Returning students cannot edit their profile directly. They list the fields
they want changed, with the new value and a reason per field, and the portal
sends an admin a flattened summary of the diff. First-time students (most of
the required fields still blank) skip all of this and fill the form in.
"""
import logging
import re

from models.permission import FieldChangeRequest, PermissionStatus
from models.student import REQUIRED_PROFILE_FIELDS, ProfileField

logger = logging.getLogger(__name__)

FIRST_TIME_EMPTY_THRESHOLD = 5
MAX_PHOTO_BYTES = 10 * 1024 * 1024

PROFILE_FORM_FIELDS = [
    "phone", "altPhone", "address", "dob", "gender", "category", "nationality",
    "bloodGroup", "aadharNumber", "fatherName", "motherName",
]
PROFILE_FLAGS = ["isPwd", "want_to_apply_for_hostel"]

REQUIRED_MESSAGES = {
    "phone": "Phone number is required",
    "address": "Address is required",
    "dob": "Date of birth is required",
    "gender": "Gender is required",
    "category": "Category is required",
    "nationality": "Nationality is required",
    "bloodGroup": "Blood group is required",
    "aadharNumber": "Aadhar number is required",
    "fatherName": "Father's name is required",
    "motherName": "Mother's name is required",
}


class PermissionRequestError(ValueError):
    pass


def empty_required_fields(profile):
    profile = profile or {}
    return [f.key for f in REQUIRED_PROFILE_FIELDS if not profile.get(f.key)]


def is_first_time_user(profile):
    return len(empty_required_fields(profile)) >= FIRST_TIME_EMPTY_THRESHOLD


def _digits(value):
    return re.sub(r"\D", "", value or "")


def validate_profile_form(form, photo=None):
    """Return ``{field: message}`` for every problem in the submitted form."""
    errors = {}
    for key, message in REQUIRED_MESSAGES.items():
        if not (form.get(key) or "").strip():
            errors[key] = message

    phone = form.get("phone") or ""
    if phone and not re.fullmatch(r"\d{10}", _digits(phone)):
        errors["phone"] = "Please enter a valid 10-digit phone number"
    alt_phone = form.get("altPhone") or ""
    if alt_phone and not re.fullmatch(r"\d{10}", _digits(alt_phone)):
        errors["altPhone"] = "Please enter a valid 10-digit phone number"
    aadhar = form.get("aadharNumber") or ""
    if aadhar and not re.fullmatch(r"\d{12}", _digits(aadhar)):
        errors["aadharNumber"] = "Please enter a valid 12-digit Aadhar number"

    if photo is not None and photo.filename:
        if not (photo.mimetype or "").startswith("image/"):
            errors["photo"] = "Please select a valid image file"
        else:
            photo.stream.seek(0, 2)
            size = photo.stream.tell()
            photo.stream.seek(0)
            if size > MAX_PHOTO_BYTES:
                errors["photo"] = "File size should be less than 10MB"
    return errors


def profile_form_fields(form):
    """Multipart fields for update-personal-details; blanks are left out."""
    fields = {}
    for key in PROFILE_FORM_FIELDS:
        value = (form.get(key) or "").strip()
        if value:
            fields[key] = value
    for key in PROFILE_FLAGS:
        fields[key] = "true" if form.get(key) in ("on", "true", "1") else "false"
    return fields


def fields_editable(first_time, permission_status):
    return first_time or PermissionStatus.parse(permission_status) is PermissionStatus.APPROVED


class PermissionRequestForm:
    """Editable list of field-change requests for one profile."""

    def __init__(self, profile, general_reason="", requested_changes=None):
        self.profile = profile or {}
        self.general_reason = general_reason
        self.requested_changes = list(requested_changes or [])
        self.status = PermissionStatus.NONE
        self.is_locked = False

    @classmethod
    def from_form(cls, profile, form):
        """Rebuild the form state from a posted HTML form."""
        request_form = cls(profile, general_reason=(form.get("general_reason") or "").strip())
        names = form.getlist("field_name")
        new_values = form.getlist("new_value")
        reasons = form.getlist("field_reason")
        for i, name in enumerate(names):
            request_form.add_field()
            request_form.update_field(
                i,
                field_name=name,
                new_value=new_values[i] if i < len(new_values) else "",
                reason=reasons[i] if i < len(reasons) else "",
            )
        return request_form

    def add_field(self):
        self.requested_changes.append(FieldChangeRequest())

    def remove_field(self, index):
        del self.requested_changes[index]

    def update_field(self, index, **partial):
        entry = self.requested_changes[index]
        name_changed = "field_name" in partial and partial["field_name"] != entry.field_name
        for key, value in partial.items():
            if not hasattr(entry, key):
                raise AttributeError(f"FieldChangeRequest has no attribute {key!r}")
            setattr(entry, key, value)

        if name_changed:
            if entry.field_name:
                field = ProfileField.from_key(entry.field_name)
                entry.current_value = field.current_value(self.profile)
                entry.field_display_name = field.label
            else:
                entry.current_value = ""
                entry.field_display_name = ""

    def available_fields(self, index):
        """Fields the picker at ``index`` may offer: its own plus unused ones."""
        taken = {
            c.field_name for i, c in enumerate(self.requested_changes)
            if i != index and c.field_name
        }
        return [f for f in ProfileField if f.key not in taken]

    def valid_changes(self):
        return [c for c in self.requested_changes if c.is_complete]

    def validate(self):
        if not self.general_reason.strip() and not self.requested_changes:
            raise PermissionRequestError(
                "Please provide a reason or add at least one field to change"
            )
        chosen = [c.field_name for c in self.requested_changes if c.is_set]
        if len(chosen) != len(set(chosen)):
            raise PermissionRequestError("Each field can only be requested once")
        for change in self.requested_changes:
            if change.is_set and not change.new_value.strip():
                raise PermissionRequestError(
                    f"Please enter a new value for {change.field_display_name or change.field_name}"
                )
            if change.is_set and not change.reason.strip():
                raise PermissionRequestError(
                    f"Please give a reason for changing {change.field_display_name or change.field_name}"
                )

    def build_summary(self):
        changes = self.valid_changes()
        if not changes:
            return self.general_reason
        parts = [
            f'{c.field_display_name}: "{c.current_value}" → "{c.new_value}"'
            for c in changes
        ]
        return "Requested changes: " + "; ".join(parts)

    def payload(self):
        return {
            "updatePermissionReason": self.general_reason,
            "requestedChanges": {
                c.field_name: {
                    "newValue": c.new_value,
                    "reason": c.reason,
                    "currentValue": c.current_value,
                }
                for c in self.valid_changes()
            },
            "changesSummary": self.build_summary(),
        }

    def submit(self, auth_store):
        if self.is_locked:
            raise PermissionRequestError("A permission request is already pending")
        self.validate()
        body = auth_store.request_update_permission(self.payload())
        self.is_locked = True
        self.status = PermissionStatus.REQUESTED
        logger.info("permission request sent for %d field(s)", len(self.valid_changes()))
        return body
