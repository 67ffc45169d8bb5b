from services.api_client import ApiError
from services.base_store import BaseStore

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class TimetableStore(BaseStore):
    def __init__(self, client):
        super().__init__(client)
        self.timetable = None

    def fetch(self):
        self.is_loading = True
        self.error = None
        try:
            self.timetable = self._get_data(
                "/api/academics/timetable", "Failed to fetch timetable data"
            )
        except ApiError as exc:
            self.timetable = None
            self.error = exc.message
        finally:
            self.is_loading = False

    def periods_by_day(self):
        """Schedule as ``[(day, periods)]`` in weekday order, unknown days last."""
        schedule = (self.timetable or {}).get("schedule") or []
        order = {day.lower(): i for i, day in enumerate(WEEKDAYS)}
        days = sorted(schedule, key=lambda d: order.get(str(d.get("day", "")).lower(), len(WEEKDAYS)))
        return [(d.get("day"), d.get("periods") or []) for d in days]

    def clear(self):
        self.timetable = None
        self.error = None
        self.is_loading = False
