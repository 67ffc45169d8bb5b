from flask_login import UserMixin


class PortalUser(UserMixin):
    """The signed-in student, rebuilt from the backend's auth check.

    Nothing here is persisted by the portal; ``profile`` is whatever the last
    ``check-auth`` call returned.
    """

    def __init__(self, profile):
        self.profile = profile or {}

    def get_id(self):
        return str(self.profile.get("_id") or self.profile.get("email") or "")

    @property
    def name(self):
        return self.profile.get("name") or ""

    @property
    def email(self):
        return self.profile.get("email") or ""

    @property
    def rollno(self):
        return self.profile.get("rollno")

    @property
    def photo(self):
        return self.profile.get("photo")

    @property
    def wants_hostel(self):
        return bool(self.profile.get("want_to_apply_for_hostel"))

    @property
    def course(self):
        course = self.profile.get("courseId")
        return course if isinstance(course, dict) else {}

    @property
    def initials(self):
        parts = self.name.split()
        return "".join(p[0] for p in parts[:2]).upper() or "?"

    def __repr__(self):
        return f"<PortalUser {self.email}>"
