"""
Dashboard module

Read-only rollups for the front desk:
- Summary cards (revenue, active rooms, customers, unpaid bookings)
- Recent bookings and rooms in use right now
- Revenue breakdown and daily revenue trend

A reservation counts as revenue only once it is fully paid.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func, or_

from rentalps import db
from rentalps.models import Customer, Payment, Reservation, Room

bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


def format_currency(amount):
    """Rp 1.250.000"""
    whole = int(Decimal(amount or 0))
    return f"{current_app.config['CURRENCY']} {whole:,}".replace(',', '.')


def _fully_paid(query):
    return query.join(Payment, Reservation.payment_id == Payment.id).filter(
        Payment.amount > 0,
        Payment.amount >= Reservation.total_price,
    )


def _active_now(query, now):
    return query.filter(Reservation.start_time <= now, Reservation.end_time > now)


def _total_revenue():
    query = (db.session.query(func.coalesce(func.sum(Reservation.total_price), 0))
             .select_from(Reservation))
    return Decimal(_fully_paid(query).scalar() or 0)


@bp.route('/stats', methods=['GET'])
def stats():
    now = datetime.now()

    active_rooms = _active_now(
        db.session.query(func.count(func.distinct(Reservation.room_id))), now
    ).scalar()
    total_rooms = db.session.query(func.count(Room.id)).scalar()
    members = db.session.query(func.count(Customer.id)).scalar()
    unpaid = (db.session.query(func.count(Reservation.id))
              .select_from(Reservation)
              .outerjoin(Payment, Reservation.payment_id == Payment.id)
              .filter(or_(Payment.id.is_(None),
                          Payment.amount <= 0,
                          Payment.amount < Reservation.total_price))
              .scalar())

    return jsonify({
        'revenue': format_currency(_total_revenue()),
        'activeRooms': f'{active_rooms} / {total_rooms}',
        'members': str(members),
        'issues': str(unpaid),
    })


@bp.route('/recent', methods=['GET'])
def recent():
    """Three newest bookings"""
    reservations = Reservation.query.order_by(Reservation.id.desc()).limit(3).all()
    fmt = current_app.config['DATETIME_FORMAT']
    return jsonify([{
        'id': reservation.id,
        'user': reservation.customer.name if reservation.customer else 'Unknown',
        'room': reservation.room.name if reservation.room else '-',
        'time': f'{reservation.start_time.strftime(fmt)} - {reservation.end_time.strftime(fmt)}',
        'status': reservation.payment_status.code,
        'amount': format_currency(reservation.total_price),
    } for reservation in reservations])


@bp.route('/active-rooms', methods=['GET'])
def active_rooms():
    fmt = current_app.config['DATETIME_FORMAT']
    reservations = (_active_now(Reservation.query, datetime.now())
                    .order_by(Reservation.start_time)
                    .all())
    return jsonify([{
        'id': reservation.id,
        'room': reservation.room.name if reservation.room else '-',
        'customer': reservation.customer.name if reservation.customer else 'Unknown',
        'start': reservation.start_time.strftime(fmt),
        'end': reservation.end_time.strftime(fmt),
    } for reservation in reservations])


@bp.route('/revenue-detail', methods=['GET'])
def revenue_detail():
    """Latest fully paid bookings split into room and food parts"""
    limit = min(max(request.args.get('limit', 10, type=int) or 10, 1), 50)
    reservations = (_fully_paid(Reservation.query)
                    .order_by(Reservation.id.desc())
                    .limit(limit)
                    .all())

    rows = []
    for reservation in reservations:
        foods = [{
            'name': order.food.name if order.food else '-',
            'qty': order.quantity,
            'price': float(order.food.price) if order.food else 0.0,
            'subtotal': float(order.subtotal()),
        } for order in reservation.orders]
        food_total = sum((order.subtotal() for order in reservation.orders), Decimal('0'))
        total = Decimal(reservation.total_price or 0)
        rows.append({
            'id': reservation.id,
            'customer': reservation.customer.name if reservation.customer else 'Unknown',
            'room': reservation.room.name if reservation.room else '-',
            'date': reservation.reservation_date.strftime(current_app.config['DATE_FORMAT']),
            'amount': float(total),
            'method': reservation.payment.method,
            'foodTotal': float(food_total),
            'roomTotal': float(max(Decimal('0'), total - food_total)),
            'foods': foods,
        })

    return jsonify({
        'rows': rows,
        'shownTotal': sum(row['amount'] for row in rows),
        'totalRevenue': float(_total_revenue()),
    })


@bp.route('/revenue-trend', methods=['GET'])
def revenue_trend():
    """Daily payment totals for the last N days (1..30), missing days as 0"""
    days = min(max(request.args.get('days', 7, type=int) or 7, 1), 30)
    start = date.today() - timedelta(days=days - 1)

    totals = dict(
        db.session.query(Payment.paid_on, func.sum(Payment.amount))
        .filter(Payment.paid_on >= start)
        .group_by(Payment.paid_on)
        .all()
    )

    series = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        series.append({
            'date': day.strftime(current_app.config['DATE_FORMAT']),
            'total': float(totals.get(day) or 0),
        })
    return jsonify(series)
