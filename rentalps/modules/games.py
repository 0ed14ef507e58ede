from flask import Blueprint, jsonify, request

from rentalps import db
from rentalps.errors import InvalidReferenceError, ValidationError
from rentalps.models.unit import GameList, Unit, UnitGame
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import get_json_body, parse_id, require_string

bp = Blueprint('games', __name__, url_prefix='/api/games')


@bp.route('/', methods=['GET'], strict_slashes=False)
def index():
    """Game catalog, searchable by name"""
    query = GameList.query
    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(GameList.name.ilike(f'%{search}%'))
    return jsonify(paginated_response(query.order_by(GameList.id)))


@bp.route('/<int:game_id>', methods=['GET'])
def detail(game_id):
    return jsonify(db.get_or_404(GameList, game_id, description='Game not found').to_dict())


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    """Add a game; with id_unit it is installed on that unit right away"""
    data = get_json_body()
    game = GameList(name=require_string(data.get('nama_game'), 'nama_game'))

    if data.get('id_unit') not in (None, ''):
        unit_id = parse_id(data['id_unit'])
        unit = db.session.get(Unit, unit_id) if unit_id else None
        if unit is None:
            raise InvalidReferenceError('id_unit tidak ditemukan')
        game.installs.append(UnitGame(unit=unit))

    db.session.add(game)
    db.session.commit()
    return jsonify(game.to_dict()), 201


@bp.route('/<int:game_id>', methods=['PUT'])
def update(game_id):
    game = db.get_or_404(GameList, game_id, description='Game not found')
    data = get_json_body()
    if 'nama_game' not in data:
        raise ValidationError('No fields to update')

    game.name = require_string(data['nama_game'], 'nama_game')
    db.session.commit()
    return jsonify(game.to_dict())


@bp.route('/<int:game_id>', methods=['DELETE'])
def delete(game_id):
    game = db.get_or_404(GameList, game_id, description='Game not found')
    db.session.delete(game)
    db.session.commit()
    return jsonify({'message': 'Game deleted'})
