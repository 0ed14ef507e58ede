"""
Reservation booking engine.

Resolves customer and room references, prices a booking, rejects
overlapping or backdated windows, takes payments and books food orders.
Every write commits here; on an exception the app error handler rolls the
session back so nothing is half written.
"""
import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from flask import current_app
from sqlalchemy import update

from rentalps import db
from rentalps.errors import (AlreadyPaidError, ConflictError, InvalidReferenceError,
                             NotFoundError, RoomNotFoundError, RoomRequiredError,
                             ValidationError)
from rentalps.models import (Customer, FoodList, OrderFood, Payment, PaymentMethod,
                             PaymentStatus, Reservation, Room)
from rentalps.utils.validators import (clean_string, parse_booking_start, parse_duration,
                                       parse_flag, parse_id, parse_optional_int, require_id)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reference resolution
# ---------------------------------------------------------------------------

def resolve_customer(customer_id=None, customer_name=None):
    """
    Customer for a booking: numeric id first, then find-or-create by exact
    name (first match wins). Neither given means a walk-in guest (None).
    """
    cid = parse_id(customer_id)
    if cid is not None:
        customer = db.session.get(Customer, cid)
        if customer is None:
            raise InvalidReferenceError(f'Customer dengan id {cid} tidak ditemukan')
        return customer

    name = clean_string(customer_name)
    if name is None:
        return None

    customer = Customer.query.filter_by(name=name).order_by(Customer.id).first()
    if customer is None:
        customer = Customer(name=name)
        db.session.add(customer)
        db.session.flush()
        logger.info('Created customer %s (%r) while booking', customer.id, name)
    return customer


def resolve_room(room_id=None, room_name=None):
    """Room by numeric id, else by exact name. Never creates a room."""
    rid = parse_id(room_id)
    if rid is not None:
        room = db.session.get(Room, rid)
        if room is None:
            raise InvalidReferenceError(f'Room dengan id {rid} tidak ditemukan')
        return room

    name = clean_string(room_name)
    if name is None:
        raise RoomRequiredError()

    room = Room.query.filter_by(name=name).order_by(Room.id).first()
    if room is None:
        raise RoomNotFoundError(name)
    return room


# ---------------------------------------------------------------------------
# Pricing, overlap, time guard
# ---------------------------------------------------------------------------

def price_per_hour(room) -> Decimal:
    """Active hourly rate of the room, or the configured default"""
    if room is not None and room.price is not None:
        return Decimal(room.price.price_per_hour)
    return Decimal(current_app.config['DEFAULT_PRICE_PER_HOUR'])


def booking_cost(room, duration) -> Decimal:
    return price_per_hour(room) * duration


def intervals_overlap(start, end, other_start, other_end) -> bool:
    # half-open: [start, end) and [other_start, other_end)
    return start < other_end and end > other_start


def has_overlap(room_id, start, end, exclude_id=None) -> bool:
    """True when another reservation of the room intersects [start, end)"""
    query = Reservation.query.filter(Reservation.room_id == room_id)
    if exclude_id is not None:
        query = query.filter(Reservation.id != exclude_id)

    for existing in query.all():
        if intervals_overlap(start, end, existing.start_time, existing.end_time):
            return True
    return False


def check_not_past(start, allow_past=False, now=None):
    """Reject starts older than the grace window unless explicitly allowed"""
    if allow_past:
        return
    now = now or datetime.now()
    grace = timedelta(minutes=current_app.config['PAST_BOOKING_GRACE_MINUTES'])
    if start < now - grace:
        raise ValidationError('Waktu mulai sudah lewat. Gunakan allow_past untuk booking mundur')


def _booking_window(data):
    start = parse_booking_start(data.get('date'), data.get('time'))
    duration = parse_duration(data.get('duration'), current_app.config['MAX_BOOKING_HOURS'])
    return start, start + timedelta(hours=duration), duration


def _room_ref(data):
    return data.get('room_id', data.get('id_room')), data.get('nama_room')


# ---------------------------------------------------------------------------
# Reservations
# ---------------------------------------------------------------------------

def get_reservation(reservation_id) -> Reservation:
    reservation = db.session.get(Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError('Reservation not found')
    return reservation


def create_reservation(data, handled_by=None) -> Reservation:
    """
    Book a room.

    total_price starts at duration x hourly rate; the new reservation has
    no payment, so it reads as unpaid.
    """
    start, end, duration = _booking_window(data)
    check_not_past(start, parse_flag(data.get('allow_past')))

    room = resolve_room(*_room_ref(data))
    if has_overlap(room.id, start, end):
        raise ConflictError('Ruangan sudah dibooking pada jam tersebut')

    customer = resolve_customer(data.get('customer_id'), data.get('customer_name'))

    charge = booking_cost(room, duration)
    reservation = Reservation(
        customer=customer,
        room=room,
        start_time=start,
        end_time=end,
        duration=duration,
        reservation_date=start.date(),
        room_charge=charge,
        total_price=charge,
        handled_by=handled_by,
    )
    db.session.add(reservation)
    db.session.commit()

    logger.info('Reservation %s booked: room %s %s-%s total %s',
                reservation.id, room.id, start, end, charge)
    return reservation


def update_reservation(reservation_id, data, handled_by=None) -> Reservation:
    """
    Re-book an existing reservation with a full booking body.

    Only the room part of the total is replaced, food orders already added
    stay in total_price. The time guard applies only when the start moves.
    """
    reservation = get_reservation(reservation_id)

    start, end, duration = _booking_window(data)
    if start != reservation.start_time:
        check_not_past(start, parse_flag(data.get('allow_past')))

    room = resolve_room(*_room_ref(data))
    if has_overlap(room.id, start, end, exclude_id=reservation.id):
        raise ConflictError('Ruangan sudah dibooking pada jam tersebut')

    customer = resolve_customer(data.get('customer_id'), data.get('customer_name'))

    new_charge = booking_cost(room, duration)
    old_charge = Decimal(reservation.room_charge or 0)

    reservation.customer = customer
    reservation.room = room
    reservation.start_time = start
    reservation.end_time = end
    reservation.duration = duration
    reservation.reservation_date = start.date()
    reservation.room_charge = new_charge
    reservation.total_price = Decimal(reservation.total_price or 0) + new_charge - old_charge
    if handled_by is not None:
        reservation.handled_by = handled_by

    db.session.commit()
    logger.info('Reservation %s updated: room %s %s-%s', reservation.id, room.id, start, end)
    return reservation


def delete_reservation(reservation_id):
    reservation = get_reservation(reservation_id)
    db.session.delete(reservation)
    db.session.commit()
    logger.info('Reservation %s deleted', reservation_id)


# ---------------------------------------------------------------------------
# Payment
# ---------------------------------------------------------------------------

def pay_reservation(reservation_id, payment_method=None):
    """
    Settle the reservation in full.

    Returns (payment, created): a new payment row for the whole total, or
    the existing short payment topped up to the total. A reservation that
    is already paid raises AlreadyPaidError and nothing changes.
    """
    reservation = get_reservation(reservation_id)

    if reservation.payment_status is PaymentStatus.PAID:
        raise AlreadyPaidError('Reservasi ini sudah lunas!')

    code = payment_method or current_app.config['DEFAULT_PAYMENT_METHOD']
    method = PaymentMethod.from_code(code)
    if method is None:
        raise ValidationError(
            f'payment_method harus salah satu dari: {", ".join(m.code for m in PaymentMethod)}')

    total = Decimal(reservation.total_price or 0)
    if total <= 0:
        raise ValidationError('Total reservasi Rp 0, tidak ada yang perlu dibayar')
    payment = reservation.payment
    created = payment is None
    if created:
        payment = Payment(amount=total, paid_on=date.today(), method=method.code)
        reservation.payment = payment
    else:
        payment.amount = total
        payment.paid_on = date.today()
        payment.method = method.code

    db.session.commit()
    logger.info('Reservation %s paid %s via %s (%s)', reservation.id, total, method.code,
                'new payment' if created else 'top-up')
    return payment, created


# ---------------------------------------------------------------------------
# Food orders
# ---------------------------------------------------------------------------

def _order_lines(items):
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError('items harus berupa daftar objek {food_id, jumlah}')
        quantity = parse_optional_int(item.get('jumlah'), 'jumlah')
        if quantity is None:
            quantity = 1
        if quantity <= 0:
            raise ValidationError('jumlah harus lebih dari 0')
        yield parse_id(item.get('food_id')), quantity


def create_order_food(reservation_id, items):
    """
    Insert food orders for a reservation and raise its total.

    Items whose food does not resolve are skipped. The rows and the total
    increment are committed together.

    Returns (reservation, orders, added_total).
    """
    if not isinstance(items, list) or not items:
        raise ValidationError('reservation_id dan items wajib diisi')

    rid = require_id(reservation_id, 'reservation_id')
    reservation = get_reservation(rid)

    orders = []
    added = Decimal('0')
    for food_id, quantity in _order_lines(items):
        food = db.session.get(FoodList, food_id) if food_id is not None else None
        if food is None:
            logger.debug('Skipping unknown food %r for reservation %s', food_id, rid)
            continue
        order = OrderFood(reservation=reservation, food=food, quantity=quantity)
        db.session.add(order)
        orders.append(order)
        added += Decimal(food.price) * quantity

    if orders:
        # increment in SQL so concurrent orders do not lose updates
        db.session.execute(
            update(Reservation)
            .where(Reservation.id == reservation.id)
            .values(total_price=Reservation.total_price + added)
        )
    db.session.commit()
    db.session.refresh(reservation)

    logger.info('Reservation %s: %d food order(s), +%s', rid, len(orders), added)
    return reservation, orders, added


def orders_for_reservation(reservation_id):
    return (OrderFood.query
            .filter_by(reservation_id=reservation_id)
            .order_by(OrderFood.id)
            .all())


# ---------------------------------------------------------------------------
# Room removal
# ---------------------------------------------------------------------------

def delete_room(room_id):
    """
    Delete a room with everything hanging off it: price row, reservations
    (with their orders and payments), game installs of its units, the units,
    then the room.
    """
    room = db.session.get(Room, room_id)
    if room is None:
        raise NotFoundError('Room not found')

    # delete-orphan removes the price row
    room.price = None

    reservations = room.reservations.all()
    for reservation in reservations:
        db.session.delete(reservation)

    units = room.units.all()
    for unit in units:
        for install in unit.installed_games:
            db.session.delete(install)
        db.session.delete(unit)

    db.session.delete(room)
    db.session.commit()

    logger.info('Room %s deleted with %d reservation(s) and %d unit(s)',
                room_id, len(reservations), len(units))
