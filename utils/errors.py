"""
utils/errors.py
-----------------
Error types raised by the services, and the Flask handlers that
turn them into `{"msg": ...}` JSON responses.
"""

import logging

from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AttendanceAPIError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidCredentials(AttendanceAPIError):
    status_code = 401
    message = "Username atau password salah"


class MissingToken(AttendanceAPIError):
    status_code = 401
    message = "Token tidak ada"


class InvalidToken(AttendanceAPIError):
    status_code = 401
    message = "Token invalid"


class Forbidden(AttendanceAPIError):
    status_code = 403
    message = "Admin only"


class InvalidInput(AttendanceAPIError):
    status_code = 400
    message = "Data tidak lengkap"


class DuplicateUsername(AttendanceAPIError):
    status_code = 400
    message = "Username sudah ada"


class DuplicateRfid(AttendanceAPIError):
    status_code = 400
    message = "RFID sudah terdaftar"


class NotFound(AttendanceAPIError):
    status_code = 404
    message = "User tidak ditemukan"


class ProtectedRole(AttendanceAPIError):
    status_code = 403
    message = "Tidak bisa hapus admin"


class NoFaceData(AttendanceAPIError):
    status_code = 404
    message = "Belum ada data wajah"


class UnknownTag(AttendanceAPIError):
    status_code = 404
    message = "RFID tidak terdaftar"


class FaceNotVerified(AttendanceAPIError):
    status_code = 403
    message = "Wajah belum diverifikasi"


class AlreadyComplete(AttendanceAPIError):
    status_code = 400
    message = "Sudah absen masuk & keluar hari ini"


class StorageUnavailable(AttendanceAPIError):
    status_code = 500
    message = "Server error"


def register_error_handlers(app):

    @app.errorhandler(AttendanceAPIError)
    def handle_api_error(err):
        return jsonify({"msg": err.message}), err.status_code

    @app.errorhandler(PyMongoError)
    def handle_storage_error(err):
        logger.error("[DB] Storage error: %s", err)
        return handle_api_error(StorageUnavailable())

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"msg": err.name}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        logger.exception("[ERROR] Unhandled exception: %s", err)
        return jsonify({"msg": "Server error"}), 500
