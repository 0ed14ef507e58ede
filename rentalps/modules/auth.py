"""
Staff authentication

- Login with username or email, tokens set as httpOnly cookies
- Refresh token rotation
- Logout and profile
"""
import logging

import jwt
from flask import Blueprint, current_app, g, jsonify, make_response, request
from sqlalchemy import or_

from rentalps import db
from rentalps.errors import AuthenticationError, InvalidCredentialsError, ValidationError
from rentalps.models.staff import User
from rentalps.utils.decorators import login_required
from rentalps.utils.security import (REFRESH, decode_token, sign_access_token,
                                     sign_refresh_token)
from rentalps.utils.validators import clean_string, get_json_body

bp = Blueprint('auth', __name__, url_prefix='/api/auth')
logger = logging.getLogger(__name__)


def _set_auth_cookies(response, user):
    config = current_app.config
    options = {
        'httponly': True,
        'secure': config['COOKIE_SECURE'],
        'samesite': config['COOKIE_SAMESITE'],
        'path': '/',
    }
    response.set_cookie('access_token', sign_access_token(user.token_payload()),
                        max_age=int(config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds()),
                        **options)
    response.set_cookie('refresh_token', sign_refresh_token(user.token_payload()),
                        max_age=int(config['JWT_REFRESH_TOKEN_EXPIRES'].total_seconds()),
                        **options)
    return response


def _user_summary(user):
    return {'username': user.username, 'email': user.email, 'role': user.role}


@bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    identifier = clean_string(data.get('username')) or clean_string(data.get('email'))
    password = data.get('password')

    if not identifier or not isinstance(password, str) or not password:
        raise ValidationError('Username/email dan password wajib diisi')

    user = User.query.filter(or_(User.username == identifier, User.email == identifier)).first()
    if user is None or not user.check_password(password):
        logger.info('Failed login for %r', identifier)
        raise InvalidCredentialsError('Username atau password salah')

    logger.info('User %s logged in', user.username)
    response = make_response(jsonify({'message': 'Login berhasil', 'user': _user_summary(user)}))
    return _set_auth_cookies(response, user)


@bp.route('/refresh', methods=['POST'])
def refresh():
    token = request.cookies.get('refresh_token')
    if not token:
        raise AuthenticationError('Refresh token tidak ditemukan')
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        raise AuthenticationError('Refresh token tidak valid atau kedaluwarsa')
    if payload.get('token_type') != REFRESH:
        raise AuthenticationError('Refresh token tidak valid')

    user = db.session.get(User, payload.get('user_id'))
    if user is None:
        raise AuthenticationError('User tidak ditemukan')

    response = make_response(jsonify({'message': 'Token diperbarui', 'user': _user_summary(user)}))
    return _set_auth_cookies(response, user)


@bp.route('/logout', methods=['POST'])
def logout():
    response = make_response(jsonify({'message': 'Logout berhasil'}))
    for name in ('access_token', 'refresh_token'):
        response.delete_cookie(name, path='/',
                               secure=current_app.config['COOKIE_SECURE'],
                               samesite=current_app.config['COOKIE_SAMESITE'])
    return response


@bp.route('/profile', methods=['GET'])
@login_required
def profile():
    return jsonify({'message': 'Profile user', 'user': g.current_user.to_profile()})
