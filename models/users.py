import logging

from bson import ObjectId
from bson.errors import InvalidId
from werkzeug.security import generate_password_hash, check_password_hash

from models.attendance import AttendanceEntry
from utils.clock import utcnow, isoformat
from utils.db import mongo

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_USER = "user"

# Fields never returned by user listings
PRIVATE_FIELDS = {"password": 0, "face_descriptor": 0}

# Checked against when the username is unknown, so both login failures cost one hash check
_DUMMY_HASH = generate_password_hash("attendance-dummy-password")


def normalize_rfid(uid):
    if uid is None:
        return None
    uid = str(uid).strip().upper()
    return uid or None


def to_object_id(user_id):
    if isinstance(user_id, ObjectId):
        return user_id
    try:
        return ObjectId(str(user_id))
    except (InvalidId, TypeError):
        return None


class User:

    @staticmethod
    def collection():
        return mongo.db.users

    def __init__(self, name, username, password, rfid_uid=None, face_descriptor=None,
                 role=ROLE_USER, phone=None, created_at=None, updated_at=None):
        self.name = name
        self.username = username
        self.password = generate_password_hash(password)
        self.rfid_uid = normalize_rfid(rfid_uid)
        self.face_descriptor = list(face_descriptor or [])
        self.role = role
        self.phone = phone
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    # Convert to dictionary for MongoDB
    def to_dict(self):
        doc = {
            "name": self.name,
            "username": self.username,
            "password": self.password,
            "face_descriptor": self.face_descriptor,
            "role": self.role,
            "face_verified": False,
            "face_verified_until": None,
            "attendance": [],
            "version": 0,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        # Left out entirely when absent so the sparse unique index ignores it
        if self.rfid_uid:
            doc["rfid_uid"] = self.rfid_uid
        if self.phone:
            doc["phone"] = self.phone
        return doc

    # Save new user
    def save(self):
        return self.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_id(user_id, projection=None):
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return User.collection().find_one({"_id": oid}, projection)

    @staticmethod
    def find_by_username(username):
        return User.collection().find_one({"username": username})

    @staticmethod
    def find_by_rfid(uid):
        uid = normalize_rfid(uid)
        if not uid:
            return None
        return User.collection().find_one({"rfid_uid": uid})

    @staticmethod
    def list_public():
        return list(User.collection().find({}, PRIVATE_FIELDS).sort("_id", 1))

    @staticmethod
    def delete_by_id(user_id):
        oid = to_object_id(user_id)
        if oid is None:
            return 0
        return User.collection().delete_one({"_id": oid}).deleted_count

    # Verify password; returns the user document or None
    @staticmethod
    def verify_password(username, password):
        user = User.find_by_username(username) if isinstance(username, str) else None
        stored = user["password"] if user else _DUMMY_HASH
        matched = check_password_hash(stored, password if isinstance(password, str) else "")
        if user and matched:
            return user
        return None

    @staticmethod
    def serialize(user):
        """JSON-friendly view of a user document, without secrets."""
        data = {
            "_id": str(user["_id"]),
            "name": user.get("name"),
            "username": user.get("username"),
            "rfid_uid": user.get("rfid_uid"),
            "role": user.get("role", ROLE_USER),
            "phone": user.get("phone"),
            "face_verified": bool(user.get("face_verified")),
            "attendance": [AttendanceEntry.serialize(e) for e in user.get("attendance") or []],
            "created_at": isoformat(user.get("created_at")),
        }
        return data


def ensure_default_admin(config):
    """Create the bootstrap admin account once, if its username is free."""
    username = config["DEFAULT_ADMIN_USERNAME"]
    if User.find_by_username(username):
        return False

    admin = User(
        name=config["DEFAULT_ADMIN_NAME"],
        username=username,
        password=config["DEFAULT_ADMIN_PASSWORD"],
        rfid_uid=config.get("DEFAULT_ADMIN_RFID"),
        role=ROLE_ADMIN,
    )
    admin.save()
    logger.info("[INIT] Default admin created")
    return True
