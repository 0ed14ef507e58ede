"""
Customer module

Customers are created here or on demand while booking by name.
Available as /api/customers and /api/customer.
"""
from flask import Blueprint, jsonify, request
from sqlalchemy import or_

from rentalps import db
from rentalps.errors import InvalidReferenceError, ValidationError
from rentalps.models.customer import Customer, Membership
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import (clean_string, get_json_body, parse_optional_int,
                                       require_string)

bp = Blueprint('customers', __name__, url_prefix='/api/customers')
alias_bp = Blueprint('customer', __name__, url_prefix='/api/customer')


def _membership_id(value):
    """Optional membership reference; must exist when given"""
    membership_id = parse_optional_int(value, 'membership_id')
    if membership_id is not None and db.session.get(Membership, membership_id) is None:
        raise InvalidReferenceError('membership_id tidak ditemukan')
    return membership_id


def index():
    query = Customer.query
    search = (request.args.get('search') or '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(Customer.name.ilike(pattern), Customer.phone.ilike(pattern)))
    return jsonify(paginated_response(query.order_by(Customer.id)))


def detail(customer_id):
    customer = db.get_or_404(Customer, customer_id, description='Customer not found')
    return jsonify(customer.to_dict())


def create():
    data = get_json_body()
    customer = Customer(
        name=require_string(data.get('nama'), 'nama'),
        phone=clean_string(data.get('no_hp')),
        membership_id=_membership_id(data.get('membership_id')),
    )
    db.session.add(customer)
    db.session.commit()
    return jsonify(customer.to_dict()), 201


def update(customer_id):
    customer = db.get_or_404(Customer, customer_id, description='Customer not found')
    data = get_json_body()

    fields = {'nama', 'no_hp', 'membership_id'} & data.keys()
    if not fields:
        raise ValidationError('No fields to update')

    if 'nama' in data:
        customer.name = require_string(data['nama'], 'nama')
    if 'no_hp' in data:
        customer.phone = clean_string(data['no_hp'])
    if 'membership_id' in data:
        customer.membership_id = _membership_id(data['membership_id'])

    db.session.commit()
    return jsonify(customer.to_dict())


def delete(customer_id):
    customer = db.get_or_404(Customer, customer_id, description='Customer not found')
    db.session.delete(customer)
    db.session.commit()
    return jsonify({'message': 'Customer deleted'})


# Same handlers under both prefixes
for blueprint in (bp, alias_bp):
    blueprint.add_url_rule('/', view_func=index, methods=['GET'], strict_slashes=False)
    blueprint.add_url_rule('/', view_func=create, methods=['POST'], strict_slashes=False)
    blueprint.add_url_rule('/<int:customer_id>', view_func=detail, methods=['GET'])
    blueprint.add_url_rule('/<int:customer_id>', view_func=update, methods=['PUT'])
    blueprint.add_url_rule('/<int:customer_id>', view_func=delete, methods=['DELETE'])
