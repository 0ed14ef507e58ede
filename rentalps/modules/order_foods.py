from flask import Blueprint, jsonify

from rentalps.services import booking
from rentalps.utils.validators import get_json_body

bp = Blueprint('order_foods', __name__, url_prefix='/api/order-foods')


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    """Add food orders to a reservation and raise its total"""
    data = get_json_body()
    reservation, orders, added = booking.create_order_food(data.get('reservation_id'),
                                                           data.get('items'))
    return jsonify({
        'message': 'Order food berhasil dibuat',
        'count': len(orders),
        'added_total': float(added),
        'total_harga': float(reservation.total_price),
        'payment_status': reservation.payment_status.code,
    }), 201


@bp.route('/by-reservation/<int:reservation_id>', methods=['GET'])
def by_reservation(reservation_id):
    booking.get_reservation(reservation_id)
    return jsonify([order.to_dict() for order in booking.orders_for_reservation(reservation_id)])
