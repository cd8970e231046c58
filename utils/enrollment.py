"""
utils/enrollment.py
-----------------
Admin-side user management: enroll, list and delete users.
"""

import logging
from numbers import Real

import numpy as np
from pymongo.errors import DuplicateKeyError

from models.users import User, ROLE_ADMIN, ROLE_USER, normalize_rfid
from utils.errors import InvalidInput, DuplicateUsername, DuplicateRfid, NotFound, ProtectedRole

logger = logging.getLogger(__name__)

DESCRIPTOR_LENGTH = 128


def _non_empty(value):
    return isinstance(value, str) and value.strip() != ""


def validate_descriptor(values):
    """Return the descriptor as a list of floats, or raise InvalidInput."""
    if not isinstance(values, (list, tuple)) or len(values) != DESCRIPTOR_LENGTH:
        raise InvalidInput()
    if any(isinstance(v, bool) or not isinstance(v, Real) for v in values):
        raise InvalidInput()

    arr = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        raise InvalidInput()
    return arr.tolist()


def enroll(name, username, password, face_descriptor, rfid_uid=None, phone=None):
    if not (_non_empty(name) and _non_empty(username) and _non_empty(password)):
        raise InvalidInput()
    descriptor = validate_descriptor(face_descriptor)

    if rfid_uid is not None and not isinstance(rfid_uid, str):
        raise InvalidInput()
    rfid_uid = normalize_rfid(rfid_uid)
    username = username.strip()

    # Uniqueness is checked before anything is written
    if User.find_by_username(username):
        raise DuplicateUsername()
    if rfid_uid and User.find_by_rfid(rfid_uid):
        raise DuplicateRfid()

    user = User(
        name=name.strip(),
        username=username,
        password=password,
        rfid_uid=rfid_uid,
        face_descriptor=descriptor,
        role=ROLE_USER,
        phone=phone.strip() if isinstance(phone, str) and phone.strip() else None,
    )
    try:
        result = user.save()
    except DuplicateKeyError as e:
        # Lost a race with a concurrent enrollment; see which index it hit
        logger.warning("[ENROLL] Duplicate key on insert for %s: %s", username, e)
        if User.collection().find_one({"username": username}, {"_id": 1}):
            raise DuplicateUsername()
        raise DuplicateRfid()

    logger.info("[ENROLL] User %s added (rfid=%s)", username, rfid_uid or "-")
    return result.inserted_id


def list_users():
    return [User.serialize(u) for u in User.list_public()]


def delete_user(user_id):
    user = User.find_by_id(user_id, {"role": 1, "username": 1})
    if not user:
        raise NotFound()
    if user.get("role") == ROLE_ADMIN:
        raise ProtectedRole()

    User.delete_by_id(user["_id"])
    logger.info("[ADMIN] User %s deleted", user.get("username"))
