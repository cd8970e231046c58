"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application.
"""

import logging

from flask_pymongo import PyMongo
from pymongo import ASCENDING

logger = logging.getLogger(__name__)

# Create a global MongoDB instance
mongo = PyMongo()

# Collection shortcuts
users_col = lambda: mongo.db.users


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Settings come from the app config (MONGO_URI and timeouts).
    """
    mongo.init_app(
        app,
        serverSelectionTimeoutMS=app.config["MONGO_SERVER_SELECTION_TIMEOUT_MS"],
        socketTimeoutMS=app.config["MONGO_SOCKET_TIMEOUT_MS"],
        connectTimeoutMS=app.config["MONGO_CONNECT_TIMEOUT_MS"],
    )
    logger.info("[DB] MongoDB connection initialized")
    return mongo


def ensure_indexes():
    """Unique username; unique RFID tag only among users that have one."""
    users_col().create_index([("username", ASCENDING)], unique=True, name="username_unique")
    users_col().create_index([("rfid_uid", ASCENDING)], unique=True, sparse=True, name="rfid_uid_unique")


def ping():
    mongo.db.command("ping")
    return True
