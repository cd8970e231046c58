import logging

from flask import Blueprint, g, jsonify

from utils.auth import token_required
from utils.mark_attendance import get_attendance
from utils.verification import get_face_descriptor, mark_verified

logger = logging.getLogger(__name__)

user_bp = Blueprint("user", __name__, url_prefix="/api")


# Stored face descriptor, compared by the capture client
@user_bp.route("/user/face", methods=["GET"])
@token_required
def face():
    descriptor = get_face_descriptor(g.current_user["id"])
    return jsonify({"descriptor": descriptor})


# Client reports a face match; opens the window for one RFID scan
@user_bp.route("/verify-face", methods=["POST"])
@token_required
def verify_face():
    expires_at = mark_verified(g.current_user["id"])
    logger.info("[VERIFY] User %s verified until %s", g.current_user["id"], expires_at)
    return jsonify({"msg": "Wajah diverifikasi"})


# Attendance history of the logged-in user
@user_bp.route("/user/attendance", methods=["GET"])
@token_required
def attendance():
    logger.info("[ATTENDANCE] User meminta rekap: %s", g.current_user["id"])
    return jsonify({"attendance": get_attendance(g.current_user["id"])})
