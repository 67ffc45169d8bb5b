from enum import Enum


def _text(value):
    if value is None:
        return ""
    return str(value).strip()


def _yes_no(value):
    if isinstance(value, str):
        value = value.strip().lower() in ("true", "yes", "1")
    return "Yes" if value else "No"


def _date(value):
    # Backend sends ISO timestamps, the form only cares about the day
    text = _text(value)
    return text[:10] if len(text) >= 10 else text


class ProfileField(Enum):
    """Profile fields a student may ask to change, with label and formatter."""

    PHONE = ("phone", "Phone Number", _text)
    ALT_PHONE = ("altPhone", "Alternate Phone Number", _text)
    ADDRESS = ("address", "Address", _text)
    DOB = ("dob", "Date of Birth", _date)
    GENDER = ("gender", "Gender", _text)
    IS_PWD = ("isPwd", "Person with Disability", _yes_no)
    CATEGORY = ("category", "Category", _text)
    NATIONALITY = ("nationality", "Nationality", _text)
    BLOOD_GROUP = ("bloodGroup", "Blood Group", _text)
    AADHAR_NUMBER = ("aadharNumber", "Aadhar Number", _text)
    FATHER_NAME = ("fatherName", "Father's Name", _text)
    MOTHER_NAME = ("motherName", "Mother's Name", _text)
    WANT_HOSTEL = ("want_to_apply_for_hostel", "Hostel Application", _yes_no)

    def __init__(self, key, label, formatter):
        self.key = key
        self.label = label
        self.formatter = formatter

    def current_value(self, profile):
        return self.formatter((profile or {}).get(self.key))

    @classmethod
    def from_key(cls, key):
        for field in cls:
            if field.key == key:
                return field
        raise ValueError(f"Unknown profile field: {key}")

    @classmethod
    def keys(cls):
        return [field.key for field in cls]


# Tracked for first-time detection and required on the profile form
REQUIRED_PROFILE_FIELDS = [
    ProfileField.PHONE,
    ProfileField.ADDRESS,
    ProfileField.DOB,
    ProfileField.GENDER,
    ProfileField.CATEGORY,
    ProfileField.NATIONALITY,
    ProfileField.BLOOD_GROUP,
    ProfileField.AADHAR_NUMBER,
    ProfileField.FATHER_NAME,
    ProfileField.MOTHER_NAME,
]

GENDERS = ["Male", "Female", "Other"]
CATEGORIES = ["General", "OBC", "SC", "ST", "EWS"]
BLOOD_GROUPS = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]
