from decimal import Decimal

from rentalps import db
from sqlalchemy.orm import relationship


# food and drink catalog
class FoodList(db.Model):
    """
    Menu item that can be ordered during a reservation
    """
    __tablename__ = 'food_list'

    id = db.Column('id_food', db.Integer, primary_key=True)
    name = db.Column('nama_makanan', db.String(120), nullable=False)          # Item name
    price = db.Column('harga', db.Numeric(12, 2), nullable=False, default=0)  # Unit price, non-negative

    orders = relationship('OrderFood', back_populates='food', passive_deletes='all')

    def to_dict(self) -> dict:
        return {
            'id_food': self.id,
            'nama_makanan': self.name,
            'harga': float(self.price or 0),
        }


# food ordered for a reservation
class OrderFood(db.Model):
    """
    One ordered line. Inserting it raises the parent reservation total by
    quantity x unit price (see services.booking.create_order_food).
    """
    __tablename__ = 'order_food'

    id = db.Column('id_order', db.Integer, primary_key=True)
    reservation_id = db.Column(db.Integer,
                               db.ForeignKey('reservation.id_reservation', ondelete='CASCADE'),
                               nullable=False, index=True)
    food_id = db.Column(db.Integer, db.ForeignKey('food_list.id_food', ondelete='RESTRICT'), nullable=False)
    quantity = db.Column('jumlah', db.Integer, nullable=False, default=1)

    food = relationship('FoodList', back_populates='orders')
    reservation = relationship('Reservation', back_populates='orders')

    def subtotal(self) -> Decimal:
        # Line subtotal at the current catalog price
        price = self.food.price if self.food else Decimal('0')
        return Decimal(price) * (self.quantity or 0)

    def to_dict(self) -> dict:
        return {
            'id_order': self.id,
            'reservation_id': self.reservation_id,
            'food_id': self.food_id,
            'jumlah': self.quantity,
            'food': self.food.to_dict() if self.food else None,
        }
