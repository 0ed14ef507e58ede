"""
Unit module

Units are the consoles placed in a room. Each unit carries its own set of
installed games (unit_game rows).
"""
import logging

from flask import Blueprint, jsonify, request
from sqlalchemy import or_

from rentalps import db
from rentalps.errors import InvalidReferenceError, ValidationError
from rentalps.models.room import Room
from rentalps.models.unit import GameList, Unit, UnitGame
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import clean_string, get_json_body, require_id, require_string

bp = Blueprint('units', __name__, url_prefix='/api/unit')
logger = logging.getLogger(__name__)


def _room_id(value):
    room_id = require_id(value, 'id_room')
    if db.session.get(Room, room_id) is None:
        raise InvalidReferenceError('id_room tidak ditemukan')
    return room_id


@bp.route('/', methods=['GET'], strict_slashes=False)
def index():
    """Units with their room; search matches name, description or room name"""
    query = Unit.query.join(Room, Unit.room_id == Room.id)
    search = (request.args.get('search') or '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            Unit.name.ilike(pattern),
            Unit.description.ilike(pattern),
            Room.name.ilike(pattern),
        ))
    return jsonify(paginated_response(query.order_by(Unit.id),
                                      lambda unit: unit.to_dict(with_room=True)))


@bp.route('/<int:unit_id>', methods=['GET'])
def detail(unit_id):
    unit = db.get_or_404(Unit, unit_id, description='Unit not found')
    return jsonify(unit.to_dict(with_room=True))


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    data = get_json_body()
    name = require_string(data.get('nama_unit'), 'nama_unit')
    if data.get('id_room') in (None, ''):
        raise ValidationError('id_room is required')

    unit = Unit(name=name,
                room_id=_room_id(data['id_room']),
                description=clean_string(data.get('deskripsi')))
    db.session.add(unit)
    db.session.commit()
    return jsonify(unit.to_dict(with_room=True)), 201


@bp.route('/<int:unit_id>', methods=['PUT'])
def update(unit_id):
    unit = db.get_or_404(Unit, unit_id, description='Unit not found')
    data = get_json_body()
    if not {'nama_unit', 'id_room', 'deskripsi'} & data.keys():
        raise ValidationError('No fields to update')

    if 'nama_unit' in data:
        unit.name = require_string(data['nama_unit'], 'nama_unit')
    if 'id_room' in data:
        unit.room_id = _room_id(data['id_room'])
    if 'deskripsi' in data:
        unit.description = clean_string(data['deskripsi'])

    db.session.commit()
    return jsonify(unit.to_dict(with_room=True))


@bp.route('/<int:unit_id>', methods=['DELETE'])
def delete(unit_id):
    unit = db.get_or_404(Unit, unit_id, description='Unit not found')
    db.session.delete(unit)
    db.session.commit()
    return jsonify({'message': 'Unit deleted'})


# Installed games

@bp.route('/<int:unit_id>/games', methods=['GET'])
def games(unit_id):
    unit = db.get_or_404(Unit, unit_id, description='Unit not found')
    return jsonify([install.to_dict() for install in unit.installed_games])


@bp.route('/games', methods=['POST'])
def add_game():
    data = get_json_body()
    unit_id = require_id(data.get('id_unit'), 'id_unit')
    game_id = require_id(data.get('id_game'), 'id_game')

    unit = db.session.get(Unit, unit_id)
    if unit is None:
        raise InvalidReferenceError('id_unit tidak ditemukan')
    game = db.session.get(GameList, game_id)
    if game is None:
        raise InvalidReferenceError('id_game tidak ditemukan')
    if UnitGame.query.filter_by(unit_id=unit_id, game_id=game_id).first() is not None:
        raise ValidationError('Game ini sudah ada di unit tersebut!')

    install = UnitGame(unit=unit, game=game)
    db.session.add(install)
    db.session.commit()
    logger.info('Game %s installed on unit %s', game_id, unit_id)
    return jsonify(install.to_dict()), 201


@bp.route('/games/<int:install_id>', methods=['DELETE'])
def remove_game(install_id):
    install = db.get_or_404(UnitGame, install_id, description='Installed game not found')
    db.session.delete(install)
    db.session.commit()
    return jsonify({'message': 'Game removed from unit'})
