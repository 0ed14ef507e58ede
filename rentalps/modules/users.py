"""
Staff user management (owner only)
"""
import logging

from flask import Blueprint, jsonify, request

from rentalps import db
from rentalps.errors import ValidationError
from rentalps.models.staff import User, UserRole
from rentalps.utils.decorators import role_required
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import clean_string, get_json_body, require_string

bp = Blueprint('users', __name__, url_prefix='/api/users')
logger = logging.getLogger(__name__)


def _role(value):
    role = clean_string(value)
    if role not in UserRole.codes():
        raise ValidationError('role must be "owner" atau "staff"')
    return role


def _email(value, user_id=None):
    email = clean_string(value)
    if email is None:
        return None
    query = User.query.filter(User.email == email)
    if user_id is not None:
        query = query.filter(User.id != user_id)
    if query.first() is not None:
        raise ValidationError('email sudah digunakan')
    return email


@bp.route('/', methods=['GET'], strict_slashes=False)
@role_required(UserRole.OWNER.code)
def index():
    query = User.query
    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(User.username.ilike(f'%{search}%'))
    return jsonify(paginated_response(query.order_by(User.id)))


@bp.route('/<int:user_id>', methods=['GET'])
@role_required(UserRole.OWNER.code)
def detail(user_id):
    return jsonify(db.get_or_404(User, user_id, description='User not found').to_dict())


@bp.route('/', methods=['POST'], strict_slashes=False)
@role_required(UserRole.OWNER.code)
def create():
    data = get_json_body()
    name = require_string(data.get('name'), 'name')
    password = require_string(data.get('password'), 'password')

    user = User(username=name, email=_email(data.get('email')), role=_role(data.get('role')))
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    logger.info('User %s created with role %s', user.username, user.role)
    return jsonify(user.to_dict()), 201


@bp.route('/<int:user_id>', methods=['PUT'])
@role_required(UserRole.OWNER.code)
def update(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    data = get_json_body()

    changed = False
    if 'name' in data:
        user.username = require_string(data['name'], 'name')
        changed = True
    if 'email' in data:
        user.email = _email(data['email'], user_id=user.id)
        changed = True
    if 'role' in data:
        user.role = _role(data['role'])
        changed = True
    password = clean_string(data.get('password'))
    if password:
        user.set_password(password)
        changed = True
    if not changed:
        raise ValidationError('No data to update')

    db.session.commit()
    return jsonify(user.to_dict())


@bp.route('/<int:user_id>', methods=['DELETE'])
@role_required(UserRole.OWNER.code)
def delete(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    db.session.delete(user)
    db.session.commit()
    return jsonify({'message': 'User deleted'})
