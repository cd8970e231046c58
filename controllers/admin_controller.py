from flask import Blueprint, request, jsonify

from utils.auth import token_required, admin_only
from utils.enrollment import enroll, list_users, delete_user
from utils.errors import InvalidInput

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


# -----------------------------
# ENROLL USER
# -----------------------------
@admin_bp.route("/enroll", methods=["POST"])
@token_required
@admin_only
def enroll_user():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidInput()

    enroll(
        name=data.get("name"),
        username=data.get("username"),
        password=data.get("password"),
        face_descriptor=data.get("face_descriptor", data.get("faceDescriptor")),
        rfid_uid=data.get("rfid_uid", data.get("rfidTag")),
        phone=data.get("phone"),
    )
    return jsonify({"msg": "User berhasil ditambahkan"})


# -----------------------------
# VIEW USERS
# -----------------------------
@admin_bp.route("/users", methods=["GET"])
@token_required
@admin_only
def view_users():
    return jsonify(list_users())


# -----------------------------
# DELETE USER
# -----------------------------
@admin_bp.route("/users/<user_id>", methods=["DELETE"])
@token_required
@admin_only
def remove_user(user_id):
    delete_user(user_id)
    return jsonify({"msg": "User dihapus"})
