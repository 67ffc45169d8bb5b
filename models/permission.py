from dataclasses import dataclass
from enum import Enum


class PermissionStatus(str, Enum):
    NONE = "none"
    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value or "none")
        except ValueError:
            return cls.NONE


@dataclass
class FieldChangeRequest:
    field_name: str = ""
    field_display_name: str = ""
    current_value: str = ""
    new_value: str = ""
    reason: str = ""

    @property
    def is_set(self):
        return bool(self.field_name)

    @property
    def is_complete(self):
        return self.is_set and bool(self.new_value.strip()) and bool(self.reason.strip())
