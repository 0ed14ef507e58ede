from rentalps.models.customer import Membership, Customer
from rentalps.models.room import Room, RoomType, PriceList
from rentalps.models.unit import Unit, GameList, UnitGame
from rentalps.models.food import FoodList, OrderFood
from rentalps.models.billing import Payment, PaymentMethod, PaymentStatus, derive_payment_status
from rentalps.models.staff import User, UserRole
from rentalps.models.reservation import Reservation

__all__ = [
    'Membership', 'Customer',
    'Room', 'RoomType', 'PriceList',
    'Unit', 'GameList', 'UnitGame',
    'FoodList', 'OrderFood',
    'Payment', 'PaymentMethod', 'PaymentStatus', 'derive_payment_status',
    'User', 'UserRole',
    'Reservation'
]
