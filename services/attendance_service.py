import math

from models.attendance import SemesterAttendance
from services.api_client import ApiError
from services.base_store import BaseStore


def round_half_up(value):
    return int(math.floor(value + 0.5))


def group_by_semester(records):
    """Bucket attendance records per semester with running totals.

    The grouping is recomputed on every fetch and never sent anywhere.
    """
    buckets = {}
    for record in records or []:
        buckets.setdefault(record.get("semester"), []).append(record)

    groups = []
    for semester in sorted(buckets, key=lambda s: (s is None, s)):
        subjects = buckets[semester]
        attended = sum(s.get("attendedClasses") or 0 for s in subjects)
        total = sum(s.get("totalClasses") or 0 for s in subjects)
        percentage = round_half_up(attended / total * 100) if total > 0 else 0
        groups.append(SemesterAttendance(
            semester=semester,
            subjects=subjects,
            total_attended=attended,
            total_classes=total,
            overall_percentage=percentage,
        ))
    return groups


class AttendanceStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.attendance = None
        self.semesters = None

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            data = self._get_data("/api/marks/attendance", "Failed to fetch attendance data")
        except ApiError as exc:
            self.attendance = None
            self.semesters = None
            self.error = exc.message
        else:
            self.attendance = data or None
            self.semesters = group_by_semester(data) if data else None
        finally:
            self.is_loading = False

    def group_by_semester(self, records):
        return group_by_semester(records)

    def clear(self):
        self.attendance = None
        self.semesters = None
        self.error = None
        self.is_loading = False
