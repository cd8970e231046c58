import logging

from flask import Blueprint, request, jsonify

from utils.errors import InvalidInput
from utils.mark_attendance import record_scan
from utils.notify import dispatch_attendance_event

logger = logging.getLogger(__name__)

device_bp = Blueprint("device", __name__)


# RFID reader endpoint (ESP32 posts JSON or a form)
@device_bp.route("/absen", methods=["POST"])
def absen():
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, dict):
        raise InvalidInput("UID tidak ada")
    uid = data.get("uid")
    logger.info("[ABSEN] Request masuk - UID: %s", uid)

    result = record_scan(uid)

    # Attendance is committed; notifications can no longer change the response
    try:
        dispatch_attendance_event(result["msg"], result["name"], result["entry"], result["timestamp"])
    except Exception as e:
        logger.error("[ABSEN] Notifikasi gagal: %s", e)

    return jsonify({"msg": result["msg"], "name": result["name"]})
