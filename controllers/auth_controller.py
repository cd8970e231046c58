import logging

from flask import Blueprint, request, jsonify

from utils.auth import login as login_user
from utils.errors import InvalidCredentials

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


# Login
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, dict):
        raise InvalidCredentials()
    username = data.get("username")
    password = data.get("password")

    try:
        result = login_user(username, password)
    except InvalidCredentials:
        logger.info("[LOGIN] Failed login for %r from %s", username, request.remote_addr)
        raise

    logger.info("[LOGIN] %s logged in", username)
    return jsonify(result)
