"""
utils/mark_attendance.py
-----------------
RFID attendance. Per user and calendar day:

    no entry  --scan-->  clocked in  --scan-->  clocked out (done)

Every scan needs an open face verification window, and a successful
scan closes it. The decision is made on the document we read and
committed with one conditional update on the user's `version`, so a
concurrent scan cannot clock the same user in twice.
"""

import logging

from flask import current_app

from models.attendance import AttendanceEntry
from models.users import User, normalize_rfid
from utils.clock import utcnow, day_key
from utils.errors import (
    InvalidInput, UnknownTag, FaceNotVerified, AlreadyComplete, NotFound, StorageUnavailable,
)
from utils.verification import is_verified

logger = logging.getLogger(__name__)

CLOCK_IN = "Clock In berhasil"
CLOCK_OUT = "Clock Out berhasil"

# Re-reads after losing a race before giving up
MAX_ATTEMPTS = 3


def _plan_transition(user, today, now, status):
    """Return (label, update, entry) for the next step of today's entry."""
    entries = list(user.get("attendance") or [])
    index, entry = AttendanceEntry.find_for_day(entries, today)

    # NO ENTRY -> CLOCK IN
    if entry is None:
        entry = AttendanceEntry(date=today, clock_in=now, status=status).to_dict()
        return CLOCK_IN, {"$push": {"attendance": entry}}, entry

    # CLOCKED IN -> CLOCK OUT
    if entry.get("clock_out") is None:
        if now <= entry["clock_in"]:
            raise InvalidInput("Waktu absen tidak valid")
        entry = dict(entry, clock_out=now)
        entries[index] = entry
        return CLOCK_OUT, {"$set": {"attendance": entries}}, entry

    # Both halves of today are filled
    raise AlreadyComplete()


def record_scan(uid, now=None):
    """
    Apply one RFID scan. Returns a dict with msg, name, user_id, entry
    and the timestamp used; raises the matching AttendanceAPIError
    otherwise.
    """
    if not isinstance(uid, str) or not uid.strip():
        raise InvalidInput("UID tidak ada")
    uid = normalize_rfid(uid)
    status = current_app.config.get("ATTENDANCE_STATUS", "Hadir")

    for attempt in range(MAX_ATTEMPTS):
        scan_time = now or utcnow()

        user = User.find_by_rfid(uid)
        if not user:
            logger.info("[ABSEN] RFID tidak terdaftar: %s", uid)
            raise UnknownTag()

        if not is_verified(user, scan_time):
            logger.info("[ABSEN] Wajah belum diverifikasi: %s", user.get("username"))
            raise FaceNotVerified()

        today = day_key(scan_time)
        label, update, entry = _plan_transition(user, today, scan_time, status)

        # One verification covers exactly one scan
        update.setdefault("$set", {}).update({
            "face_verified": False,
            "face_verified_until": None,
            "updated_at": scan_time,
        })
        update["$inc"] = {"version": 1}

        result = User.collection().update_one(
            {
                "_id": user["_id"],
                "version": user.get("version"),
                "face_verified": True,
                "face_verified_until": {"$gt": scan_time},
            },
            update,
        )
        if result.modified_count == 1:
            logger.info("[ABSEN] %s: %s (%s)", label, user.get("username"), today)
            return {
                "msg": label,
                "name": user.get("name"),
                "user_id": str(user["_id"]),
                "entry": entry,
                "timestamp": scan_time,
            }

        logger.warning("[ABSEN] %s changed during scan, re-reading (attempt %d)",
                       user.get("username"), attempt + 1)

    raise StorageUnavailable()


def get_attendance(user_id):
    user = User.find_by_id(user_id, {"attendance": 1})
    if not user:
        raise NotFound()
    return [AttendanceEntry.serialize(e) for e in user.get("attendance") or []]
