"""
utils/verification.py
-----------------
Face verification session. The capture client compares faces itself;
here we only hand out the stored descriptor and remember, for a short
window, that the user passed the check.

The window is a stored expiry (`face_verified_until`) that is checked
whenever the flag is read, so nothing has to run when it lapses.
"""

from datetime import timedelta

from flask import current_app

from models.users import User, to_object_id
from utils.clock import utcnow
from utils.errors import NoFaceData, NotFound


def get_face_descriptor(user_id):
    user = User.find_by_id(user_id, {"face_descriptor": 1})
    if not user:
        raise NotFound()
    descriptor = user.get("face_descriptor") or []
    if not descriptor:
        raise NoFaceData()
    return list(descriptor)


def mark_verified(user_id, now=None):
    """Open (or extend) the verification window; returns its expiry."""
    now = now or utcnow()
    expires_at = now + timedelta(seconds=current_app.config["FACE_VERIFY_WINDOW_SECONDS"])

    oid = to_object_id(user_id)
    if oid is None:
        raise NotFound()
    result = User.collection().update_one(
        {"_id": oid},
        {"$set": {"face_verified": True, "face_verified_until": expires_at}},
    )
    if result.matched_count == 0:
        raise NotFound()
    return expires_at


def is_verified(user, now=None):
    now = now or utcnow()
    until = user.get("face_verified_until")
    return bool(user.get("face_verified")) and until is not None and now < until
