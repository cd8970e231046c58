"""
config.py
-----------------
Application settings, read from the environment (and a local .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default="0"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    # MongoDB (MONGO_URL kept for older deployments)
    MONGO_URI = os.getenv("MONGO_URI") or os.getenv("MONGO_URL") or "mongodb://localhost:27017/absensi"
    MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "30000"))
    MONGO_SOCKET_TIMEOUT_MS = int(os.getenv("MONGO_SOCKET_TIMEOUT_MS", "60000"))
    MONGO_CONNECT_TIMEOUT_MS = int(os.getenv("MONGO_CONNECT_TIMEOUT_MS", "30000"))

    # Startup tasks: indexes + default admin
    INIT_DB_ON_START = _env_bool("INIT_DB_ON_START", "1")
    DEFAULT_ADMIN_NAME = os.getenv("DEFAULT_ADMIN_NAME", "Administrator")
    DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
    DEFAULT_ADMIN_RFID = os.getenv("DEFAULT_ADMIN_RFID", "ADMIN000")

    # Bearer tokens
    JWT_SECRET = os.getenv("JWT_SECRET", "rahasia123")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "8"))

    # Attendance
    FACE_VERIFY_WINDOW_SECONDS = int(os.getenv("FACE_VERIFY_WINDOW_SECONDS", "300"))
    ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Jakarta")
    ATTENDANCE_STATUS = "Hadir"

    # Outbound notifications
    FONNTE_URL = os.getenv("FONNTE_URL", "https://api.fonnte.com/send")
    FONNTE_TOKEN = os.getenv("FONNTE_TOKEN", "")
    FONNTE_TARGET = os.getenv("FONNTE_TARGET", "")
    GOOGLE_SCRIPT_URL = os.getenv("GOOGLE_SCRIPT_URL", "")
    NOTIFY_TIMEOUT = float(os.getenv("NOTIFY_TIMEOUT", "10"))
    NOTIFY_SYNC = _env_bool("NOTIFY_SYNC", "0")

    # Misc
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "")
    PORT = int(os.getenv("PORT", "3000"))


class TestingConfig(Config):
    TESTING = True
    MONGO_URI = "mongodb://localhost:27017/absensi_test"
    INIT_DB_ON_START = False
    JWT_SECRET = "test-secret"
    NOTIFY_SYNC = True
    FONNTE_TOKEN = "test-token"
    FONNTE_TARGET = "620000000000"
    GOOGLE_SCRIPT_URL = "https://script.example.test/exec"
    LOG_DIR = ""
