"""
Room and hourly price models
"""
from enum import Enum
from rentalps import db


class RoomType(Enum):
    # Room types
    VIP = ('vip', 'VIP')
    REGULER = ('reguler', 'Reguler')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def codes(cls):
        return [room_type.code for room_type in cls]


class Room(db.Model):
    """
    Rentable room

    Owns its single price row, its units and its reservations.
    """
    __tablename__ = 'room'

    id = db.Column('id_room', db.Integer, primary_key=True)
    name = db.Column('nama_room', db.String(100), nullable=False, index=True)  # room name
    room_type = db.Column('tipe_room', db.String(20), nullable=False)         # vip / reguler
    capacity = db.Column('kapasitas', db.Integer, nullable=True)              # people

    # One-to-one current hourly price
    price = db.relationship('PriceList', back_populates='room', uselist=False,
                            cascade='all, delete-orphan')
    units = db.relationship('Unit', back_populates='room', lazy='dynamic')
    reservations = db.relationship('Reservation', back_populates='room', lazy='dynamic')

    @property
    def price_per_hour(self):
        """Hourly rate of the active price row (None if the room has none)"""
        return self.price.price_per_hour if self.price else None

    def set_price(self, price_per_hour):
        """Create or update the single price row"""
        if self.price is None:
            self.price = PriceList(price_per_hour=price_per_hour)
        else:
            self.price.price_per_hour = price_per_hour

    def get_type_display(self):
        for room_type in RoomType:
            if room_type.code == self.room_type:
                return room_type.display_name
        return self.room_type

    def to_dict(self, with_price=False):
        """Serialisation for JSON"""
        data = {
            'id_room': self.id,
            'nama_room': self.name,
            'tipe_room': self.room_type,
            'kapasitas': self.capacity,
        }
        if with_price:
            data['price_list'] = self.price.to_dict() if self.price else None
            data['harga_per_jam'] = float(self.price_per_hour) if self.price else None
        return data

    def __repr__(self):
        return f'<Room {self.name} ({self.get_type_display()})>'


class PriceList(db.Model):
    """Hourly price of a room (at most one row per room)"""
    __tablename__ = 'price_list'

    id = db.Column('id_price_list', db.Integer, primary_key=True)
    room_id = db.Column('id_room', db.Integer,
                        db.ForeignKey('room.id_room', ondelete='CASCADE'),
                        nullable=False, unique=True)
    price_per_hour = db.Column('harga_per_jam', db.Numeric(12, 2), nullable=False)

    room = db.relationship('Room', back_populates='price')

    def to_dict(self):
        return {
            'id_price_list': self.id,
            'id_room': self.room_id,
            'harga_per_jam': float(self.price_per_hour),
        }

    def __repr__(self):
        return f'<PriceList room={self.room_id}: {self.price_per_hour}/h>'
