"""
Token signing and password helpers.

Tokens are HS256 JWTs carrying ``user_id``, ``username``, ``role`` and a
``token_type`` claim (``access`` or ``refresh``).
"""
from datetime import datetime, timezone

import jwt
from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

ACCESS = 'access'
REFRESH = 'refresh'


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def verify_password(plain: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, plain)


def _sign(payload: dict, token_type: str, lifetime) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        **payload,
        'token_type': token_type,
        'iat': now,
        'exp': now + lifetime,
    }
    return jwt.encode(claims,
                      current_app.config['JWT_SECRET_KEY'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def sign_access_token(payload: dict) -> str:
    return _sign(payload, ACCESS, current_app.config['JWT_ACCESS_TOKEN_EXPIRES'])


def sign_refresh_token(payload: dict) -> str:
    return _sign(payload, REFRESH, current_app.config['JWT_REFRESH_TOKEN_EXPIRES'])


def decode_token(token: str) -> dict:
    """Verify signature and expiry; raises jwt.PyJWTError on failure"""
    return jwt.decode(token,
                      current_app.config['JWT_SECRET_KEY'],
                      algorithms=[current_app.config['JWT_ALGORITHM']])
