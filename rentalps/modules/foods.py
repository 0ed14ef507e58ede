from flask import Blueprint, jsonify, request

from rentalps import db
from rentalps.errors import ValidationError
from rentalps.models.food import FoodList
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import get_json_body, parse_money, require_string

bp = Blueprint('foods', __name__, url_prefix='/api/foods')


@bp.route('/', methods=['GET'], strict_slashes=False)
def index():
    """Food menu, searchable by name"""
    query = FoodList.query
    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(FoodList.name.ilike(f'%{search}%'))
    return jsonify(paginated_response(query.order_by(FoodList.id)))


@bp.route('/<int:food_id>', methods=['GET'])
def detail(food_id):
    return jsonify(db.get_or_404(FoodList, food_id, description='Food not found').to_dict())


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    data = get_json_body()
    food = FoodList(
        name=require_string(data.get('nama_makanan'), 'nama_makanan'),
        price=parse_money(data.get('harga'), 'harga'),
    )
    db.session.add(food)
    db.session.commit()
    return jsonify(food.to_dict()), 201


@bp.route('/<int:food_id>', methods=['PUT'])
def update(food_id):
    food = db.get_or_404(FoodList, food_id, description='Food not found')
    data = get_json_body()
    if not {'nama_makanan', 'harga'} & data.keys():
        raise ValidationError('No fields to update')

    if 'nama_makanan' in data:
        food.name = require_string(data['nama_makanan'], 'nama_makanan')
    if 'harga' in data:
        food.price = parse_money(data['harga'], 'harga')

    db.session.commit()
    return jsonify(food.to_dict())


@bp.route('/<int:food_id>', methods=['DELETE'])
def delete(food_id):
    # ordered foods stay referenced; the foreign key refuses the delete
    food = db.get_or_404(FoodList, food_id, description='Food not found')
    db.session.delete(food)
    db.session.commit()
    return jsonify({'message': 'Food deleted'})
