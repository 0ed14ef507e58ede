from rentalps import db
from sqlalchemy.orm import relationship


# membership tier referenced by customers
class Membership(db.Model):

    __tablename__ = 'membership'

    id = db.Column('id_membership', db.Integer, primary_key=True)
    tier_name = db.Column('nama_tier', db.String(50), nullable=False)    # Tier name (Silver, Gold ...)
    discount_percent = db.Column('diskon_persen', db.Integer, nullable=True)
    bonus_points = db.Column('poin_bonus', db.Integer, nullable=True)

    # Deleting a referenced tier is refused by the foreign key
    customers = relationship('Customer', back_populates='membership', passive_deletes='all')

    def to_dict(self) -> dict:
        return {
            'id_membership': self.id,
            'nama_tier': self.tier_name,
            'diskon_persen': self.discount_percent,
            'poin_bonus': self.bonus_points,
        }

    def __repr__(self):
        return f'<Membership {self.id}: {self.tier_name}>'


# customer, created explicitly or on demand while booking by name
class Customer(db.Model):

    __tablename__ = 'customer'

    id = db.Column('id_customer', db.Integer, primary_key=True)
    name = db.Column('nama', db.String(100), nullable=False, index=True)   # not unique
    phone = db.Column('no_hp', db.String(32), nullable=True)
    membership_id = db.Column(
        db.Integer,
        db.ForeignKey('membership.id_membership', ondelete='RESTRICT'),
        nullable=True,
    )

    membership = relationship('Membership', back_populates='customers')
    reservations = relationship('Reservation', back_populates='customer', passive_deletes=True)

    def to_dict(self) -> dict:
        return {
            'id_customer': self.id,
            'nama': self.name,
            'no_hp': self.phone,
            'membership_id': self.membership_id,
            'membership': self.membership.to_dict() if self.membership else None,
        }

    def __repr__(self):
        return f'<Customer {self.id}: {self.name}>'
