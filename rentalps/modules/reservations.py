"""
Reservation module

- Timeline of one day and paginated booking history
- Booking, re-booking and deletion
- Payment of the outstanding total
"""
from flask import Blueprint, g, jsonify, request
from sqlalchemy import or_

from rentalps.models import Payment, Reservation
from rentalps.services import booking
from rentalps.utils.pagination import build_meta, page_args
from rentalps.utils.validators import get_json_body, parse_date, parse_flag

bp = Blueprint('reservations', __name__, url_prefix='/api/reservations')


@bp.route('/', methods=['GET'], strict_slashes=False)
def index():
    """
    ?date=YYYY-MM-DD -> list of that day's reservations by start time.
    Otherwise paginated history, newest first, optionally only not fully paid.
    """
    day = request.args.get('date')
    if day:
        reservations = (Reservation.query
                        .filter(Reservation.reservation_date == parse_date(day))
                        .order_by(Reservation.start_time, Reservation.id)
                        .all())
        return jsonify([reservation.to_dict() for reservation in reservations])

    query = Reservation.query
    if parse_flag(request.args.get('unpaid')):
        # derived status != paid
        query = query.outerjoin(Payment, Reservation.payment_id == Payment.id).filter(or_(
            Payment.id.is_(None),
            Payment.amount <= 0,
            Payment.amount < Reservation.total_price,
        ))

    page, limit = page_args()
    pagination = (query
                  .order_by(Reservation.start_time.desc(), Reservation.id.desc())
                  .paginate(page=page, per_page=limit, error_out=False))
    meta = build_meta(page, limit, pagination.total or 0)
    return jsonify({
        'data': [reservation.to_dict() for reservation in pagination.items],
        'pagination': meta,
        'meta': meta,
    })


@bp.route('/<int:reservation_id>', methods=['GET'])
def detail(reservation_id):
    return jsonify(booking.get_reservation(reservation_id).to_dict())


@bp.route('/<int:reservation_id>/with-orders', methods=['GET'])
def with_orders(reservation_id):
    reservation = booking.get_reservation(reservation_id)
    data = reservation.to_dict()
    data['orders'] = [order.to_dict() for order in reservation.orders]
    return jsonify(data)


@bp.route('/', methods=['POST'], strict_slashes=False)
def create():
    reservation = booking.create_reservation(get_json_body(), handled_by=g.get('current_user'))
    return jsonify(reservation.to_dict()), 201


@bp.route('/<int:reservation_id>', methods=['PUT'])
def update(reservation_id):
    reservation = booking.update_reservation(reservation_id, get_json_body(),
                                             handled_by=g.get('current_user'))
    return jsonify(reservation.to_dict())


@bp.route('/<int:reservation_id>', methods=['DELETE'])
def delete(reservation_id):
    booking.delete_reservation(reservation_id)
    return jsonify({'message': 'Reservation deleted'})


@bp.route('/pay/<int:reservation_id>', methods=['POST'])
def pay(reservation_id):
    """201 for a new payment, 200 when a short payment was topped up"""
    data = get_json_body()
    payment, created = booking.pay_reservation(reservation_id, data.get('payment_method'))
    reservation = payment.reservation
    return jsonify({
        'message': 'Payment Dibayar Lunas',
        'data': {
            'payment': payment.to_dict(),
            'reservation': reservation.to_dict(),
        },
    }), 201 if created else 200
