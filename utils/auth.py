from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request

from models.users import User
from utils.errors import InvalidCredentials, MissingToken, InvalidToken, Forbidden


def issue_token(user_id, role, now=None):
    cfg = current_app.config
    now = now or datetime.now(timezone.utc)
    payload = {
        "id": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=cfg["JWT_EXPIRES_HOURS"]),
    }
    return jwt.encode(payload, cfg["JWT_SECRET"], algorithm=cfg["JWT_ALGORITHM"])


def login(username, password):
    user = User.verify_password(username, password)
    if not user:
        raise InvalidCredentials()
    token = issue_token(user["_id"], user.get("role", "user"))
    return {"token": token, "role": user.get("role", "user"), "userId": str(user["_id"])}


def bearer_token(header):
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate(header):
    """Validate an Authorization header; returns the {id, role} claims."""
    token = bearer_token(header)
    if not token:
        raise MissingToken()

    cfg = current_app.config
    try:
        claims = jwt.decode(token, cfg["JWT_SECRET"], algorithms=[cfg["JWT_ALGORITHM"]])
    except jwt.InvalidTokenError:
        # covers ExpiredSignatureError and bad signatures
        raise InvalidToken()

    if not claims.get("id") or not claims.get("role"):
        raise InvalidToken()
    return {"id": claims["id"], "role": claims["role"]}


def require_role(role, actual):
    if actual != role:
        raise Forbidden()


# Makes sure the request carries a valid bearer token
def token_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        g.current_user = authenticate(request.headers.get("Authorization"))
        return view_function(*args, **kwargs)
    return decorated_function


# Use below @token_required
def admin_only(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        require_role("admin", g.current_user["role"])
        return view_function(*args, **kwargs)
    return decorated_function
