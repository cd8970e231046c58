# models/__init__.py

from .users import User
from .attendance import AttendanceEntry

__all__ = [
    "User",
    "AttendanceEntry"
]
