"""
Request authentication helpers.

The access token is read from the ``access_token`` cookie or an
``Authorization: Bearer`` header. Authentication is optional per request;
routes that need it use :func:`login_required`.
"""
from functools import wraps

import jwt
from flask import g, request

from rentalps import db
from rentalps.errors import AuthenticationError, PermissionDeniedError
from rentalps.models.staff import User
from rentalps.utils.security import ACCESS, decode_token


def _token_from_request():
    token = request.cookies.get('access_token')
    if token:
        return token
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header[7:].strip() or None
    return None


def load_current_user():
    """before_request hook: resolve g.current_user (or None)"""
    g.current_user = None
    g.token_error = None

    token = _token_from_request()
    if not token:
        return
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        g.token_error = 'Invalid or expired token'
        return
    if payload.get('token_type') != ACCESS:
        g.token_error = 'Invalid token type'
        return
    g.current_user = db.session.get(User, payload.get('user_id'))


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get('current_user') is None:
            raise AuthenticationError(g.get('token_error') or 'Authentication required')
        return view(*args, **kwargs)
    return wrapped


def role_required(*roles):
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapped(*args, **kwargs):
            if g.current_user.role not in roles:
                raise PermissionDeniedError('Insufficient role')
            return view(*args, **kwargs)
        return wrapped
    return decorator
