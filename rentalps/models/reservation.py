"""
Reservation model
"""
from datetime import datetime
from rentalps import db
from rentalps.models.billing import derive_payment_status
from sqlalchemy.orm import relationship


class Reservation(db.Model):
    """
    Booking of one room over [start_time, end_time).

    total_price = room_charge + every food order added afterwards. It is only
    ever incremented by food orders; an update swaps the room part.
    Payment status is derived from the payment row at read time.
    """
    __tablename__ = 'reservation'

    id = db.Column('id_reservation', db.Integer, primary_key=True)

    # Walk-in guests have no customer
    customer_id = db.Column(db.Integer,
                            db.ForeignKey('customer.id_customer', ondelete='SET NULL'),
                            nullable=True, index=True)
    room_id = db.Column('id_room', db.Integer, db.ForeignKey('room.id_room'), nullable=False, index=True)

    # Booked window
    start_time = db.Column('waktu_mulai', db.DateTime, nullable=False, index=True)
    end_time = db.Column('waktu_selesai', db.DateTime, nullable=False)
    duration = db.Column('durasi', db.Integer, nullable=False)           # hours
    reservation_date = db.Column('tanggal_reservasi', db.Date, nullable=False, index=True)

    # Money
    room_charge = db.Column('harga_room', db.Numeric(12, 2), nullable=False, default=0)
    total_price = db.Column('total_harga', db.Numeric(12, 2), nullable=False, default=0)

    payment_id = db.Column(db.Integer, db.ForeignKey('payment.id_payment'), nullable=True, unique=True)
    handled_by_id = db.Column('handled_by', db.Integer,
                              db.ForeignKey('user.id_user', ondelete='SET NULL'), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship('Customer', back_populates='reservations')
    room = relationship('Room', back_populates='reservations')
    payment = relationship('Payment', back_populates='reservation',
                           cascade='all, delete-orphan', single_parent=True)
    orders = relationship('OrderFood', back_populates='reservation',
                          cascade='all, delete-orphan', order_by='OrderFood.id')
    handled_by = relationship('User')

    @property
    def payment_status(self):
        return derive_payment_status(self.total_price, self.payment)

    def to_dict(self):
        """Reservation shaped for the frontend"""
        status = self.payment_status
        return {
            'id_reservation': self.id,
            'customer_id': self.customer_id,
            'id_room': self.room_id,
            'customer_name': self.customer.name if self.customer else None,
            'nama_room': self.room.name if self.room else None,
            'waktu_mulai': self.start_time.strftime('%Y-%m-%d %H:%M:%S'),
            'waktu_selesai': self.end_time.strftime('%Y-%m-%d %H:%M:%S'),
            'durasi': self.duration,
            'tanggal_reservasi': self.reservation_date.strftime('%Y-%m-%d'),
            'total_harga': float(self.total_price or 0),
            'payment_status': status.code,
            'payment_status_display': status.display_name,
            'payment_method': self.payment.method if self.payment else None,
            'total_bayar': float(self.payment.amount or 0) if self.payment else 0.0,
            'handled_by': self.handled_by.username if self.handled_by else None,
        }

    def __repr__(self):
        return f'<Reservation {self.id}: room {self.room_id} ({self.start_time} - {self.end_time})>'
