"""
Membership tiers
"""
from flask import Blueprint, jsonify, request

from rentalps import db
from rentalps.errors import ValidationError
from rentalps.models.customer import Membership
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import get_json_body, parse_optional_int, require_string

bp = Blueprint('memberships', __name__, url_prefix='/api/membership')


def _percent(value):
    percent = parse_optional_int(value, 'diskon_persen')
    if percent is not None and not 0 <= percent <= 100:
        raise ValidationError('diskon_persen must be between 0 and 100')
    return percent


def _points(value):
    points = parse_optional_int(value, 'poin_bonus')
    if points is not None and points < 0:
        raise ValidationError('poin_bonus must not be negative')
    return points


@bp.route('/', methods=['GET'], strict_slashes=False)
def index():
    query = Membership.query
    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(Membership.tier_name.ilike(f'%{search}%'))
    return jsonify(paginated_response(query.order_by(Membership.id)))


@bp.route('/<int:membership_id>', methods=['GET'])
def detail(membership_id):
    membership = db.get_or_404(Membership, membership_id, description='Membership not found')
    return jsonify(membership.to_dict())


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    data = get_json_body()
    membership = Membership(
        tier_name=require_string(data.get('nama_tier'), 'nama_tier'),
        discount_percent=_percent(data.get('diskon_persen')),
        bonus_points=_points(data.get('poin_bonus')),
    )
    db.session.add(membership)
    db.session.commit()
    return jsonify(membership.to_dict()), 201


@bp.route('/<int:membership_id>', methods=['PUT'])
def update(membership_id):
    membership = db.get_or_404(Membership, membership_id, description='Membership not found')
    data = get_json_body()
    if not {'nama_tier', 'diskon_persen', 'poin_bonus'} & data.keys():
        raise ValidationError('No fields to update')

    if 'nama_tier' in data:
        membership.tier_name = require_string(data['nama_tier'], 'nama_tier')
    if 'diskon_persen' in data:
        membership.discount_percent = _percent(data['diskon_persen'])
    if 'poin_bonus' in data:
        membership.bonus_points = _points(data['poin_bonus'])

    db.session.commit()
    return jsonify(membership.to_dict())


@bp.route('/<int:membership_id>', methods=['DELETE'])
def delete(membership_id):
    """Refused with 400 while customers still reference the tier"""
    membership = db.get_or_404(Membership, membership_id, description='Membership not found')
    db.session.delete(membership)
    db.session.commit()
    return jsonify({'message': 'Membership deleted'})
