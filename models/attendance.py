from utils.clock import isoformat


class AttendanceEntry:
    """
    One day of attendance, embedded in the user's `attendance` list.

    Example:
        {"date": "2026-10-17", "clock_in": <UTC datetime>,
         "clock_out": None, "status": "Hadir"}
    """

    def __init__(self, date, clock_in, clock_out=None, status="Hadir"):
        self.date = date
        self.clock_in = clock_in
        self.clock_out = clock_out
        self.status = status

    def to_dict(self):
        return {
            "date": self.date,
            "clock_in": self.clock_in,
            "clock_out": self.clock_out,
            "status": self.status,
        }

    @staticmethod
    def find_for_day(entries, day):
        for index, entry in enumerate(entries or []):
            if entry.get("date") == day:
                return index, entry
        return None, None

    # JSON shape used by the API
    @staticmethod
    def serialize(entry):
        return {
            "date": entry.get("date"),
            "clockIn": isoformat(entry.get("clock_in")),
            "clockOut": isoformat(entry.get("clock_out")),
            "status": entry.get("status"),
        }
