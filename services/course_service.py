from services.api_client import ApiError
from services.base_store import BaseStore


class CourseStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.course = None

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            self.course = self._get_data(
                "/api/course", "An error occurred while fetching course data"
            )
        except ApiError as exc:
            self.course = None
            self.error = exc.message
        finally:
            self.is_loading = False

    @property
    def teachers(self):
        if not self.course:
            return []
        return self.course.get("assignedTeachers") or []

    def clear(self):
        self.course = None
        self.error = None
        self.is_loading = False
