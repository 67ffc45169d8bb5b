from models.marks import SemesterMarks
from services.api_client import ApiError
from services.base_store import BaseStore


def group_by_semester(records):
    buckets = {}
    for record in records or []:
        buckets.setdefault(record.get("semester"), []).append(record)
    return [
        SemesterMarks(semester=semester, marks=buckets[semester])
        for semester in sorted(buckets, key=lambda s: (s is None, s))
    ]


class MarksStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.marks = None
        self.semesters = None

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            data = self._get_data("/api/marks/marks", "Failed to fetch marks data")
        except ApiError as exc:
            self.marks = None
            self.semesters = None
            self.error = exc.message
        else:
            self.marks = data or None
            self.semesters = group_by_semester(data) if data else None
        finally:
            self.is_loading = False

    def group_by_semester(self, records):
        return group_by_semester(records)

    def clear(self):
        self.marks = None
        self.semesters = None
        self.error = None
        self.is_loading = False
