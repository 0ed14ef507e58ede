"""
Room module

- Room list (plain or with hourly price), search by name or exact type
- Room create/update keep a single price row per room
- Delete cascades through price, reservations, unit installs and units

Available as /api/rooms and /api/room.
"""
from flask import Blueprint, jsonify, request
from sqlalchemy import or_

from rentalps import db
from rentalps.errors import ValidationError
from rentalps.models.room import Room, RoomType
from rentalps.services import booking
from rentalps.utils.pagination import paginated_response
from rentalps.utils.validators import (get_json_body, parse_money, parse_optional_int,
                                       require_string)

bp = Blueprint('rooms', __name__, url_prefix='/api/rooms')
alias_bp = Blueprint('room', __name__, url_prefix='/api/room')


def _room_type(value):
    room_type = require_string(value, 'tipe_room').lower()
    if room_type not in RoomType.codes():
        raise ValidationError('tipe_room must be "vip" atau "reguler"')
    return room_type


def _capacity(value):
    capacity = parse_optional_int(value, 'kapasitas')
    if capacity is not None and capacity < 0:
        raise ValidationError('kapasitas must not be negative')
    return capacity


def _filtered_rooms():
    query = Room.query
    search = (request.args.get('search') or '').strip()
    if search:
        conditions = [Room.name.ilike(f'%{search}%')]
        # the type matches only on an exact type name
        if search.lower() in RoomType.codes():
            conditions.append(Room.room_type == search.lower())
        query = query.filter(or_(*conditions))
    return query.order_by(Room.id)


def index():
    return jsonify(paginated_response(_filtered_rooms()))


def with_price():
    result = paginated_response(_filtered_rooms(), lambda room: room.to_dict(with_price=True))
    result['message'] = 'Data room berhasil diambil'
    return jsonify(result)


def detail(room_id):
    room = db.get_or_404(Room, room_id, description='Room not found')
    return jsonify(room.to_dict(with_price=True))


def create():
    data = get_json_body()
    room = Room(
        name=require_string(data.get('nama_room'), 'nama_room'),
        room_type=_room_type(data.get('tipe_room')),
        capacity=_capacity(data.get('kapasitas')),
    )
    price = parse_money(data.get('harga'), 'harga', required=False)
    if price is not None:
        room.set_price(price)

    db.session.add(room)
    db.session.commit()
    return jsonify(room.to_dict(with_price=True)), 201


def update(room_id):
    room = db.get_or_404(Room, room_id, description='Room not found')
    data = get_json_body()
    if not {'nama_room', 'tipe_room', 'kapasitas', 'harga'} & data.keys():
        raise ValidationError('No fields to update')

    if 'nama_room' in data:
        room.name = require_string(data['nama_room'], 'nama_room')
    if 'tipe_room' in data:
        room.room_type = _room_type(data['tipe_room'])
    if 'kapasitas' in data:
        room.capacity = _capacity(data['kapasitas'])
    if 'harga' in data:
        room.set_price(parse_money(data['harga'], 'harga'))

    db.session.commit()
    return jsonify(room.to_dict(with_price=True))


def delete(room_id):
    booking.delete_room(room_id)
    return jsonify({'message': 'Room deleted'})


for blueprint in (bp, alias_bp):
    blueprint.add_url_rule('/', view_func=index, methods=['GET'], strict_slashes=False)
    blueprint.add_url_rule('/with-price', view_func=with_price, methods=['GET'])
    blueprint.add_url_rule('/', view_func=create, methods=['POST'], strict_slashes=False)
    blueprint.add_url_rule('/<int:room_id>', view_func=detail, methods=['GET'])
    blueprint.add_url_rule('/<int:room_id>', view_func=update, methods=['PUT'])
    blueprint.add_url_rule('/<int:room_id>', view_func=delete, methods=['DELETE'])
