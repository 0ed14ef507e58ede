"""
Demo data: membership tiers, priced rooms with units and games, the food
menu and one owner account.
"""
import logging
from decimal import Decimal

from rentalps import db
from rentalps.models import (FoodList, GameList, Membership, Room, RoomType, Unit,
                             UnitGame, User, UserRole)

logger = logging.getLogger(__name__)

MEMBERSHIPS = [
    # tier, discount %, bonus points
    ('Silver', 5, 10),
    ('Gold', 10, 25),
    ('Platinum', 15, 50),
]

ROOMS = [
    # name, type, capacity, price per hour
    ('VIP 1', RoomType.VIP.code, 6, Decimal('50000')),
    ('VIP 2', RoomType.VIP.code, 6, Decimal('50000')),
    ('Reguler 1', RoomType.REGULER.code, 4, Decimal('15000')),
    ('Reguler 2', RoomType.REGULER.code, 4, Decimal('15000')),
    ('Reguler 3', RoomType.REGULER.code, 4, Decimal('12000')),
]

GAMES = ['EA Sports FC 25', 'eFootball 2025', 'Tekken 8', 'Gran Turismo 7', 'Mortal Kombat 1']

FOODS = [
    ('Indomie Goreng', Decimal('12000')),
    ('Indomie Kuah', Decimal('12000')),
    ('Nasi Goreng', Decimal('20000')),
    ('Kentang Goreng', Decimal('15000')),
    ('Es Teh Manis', Decimal('5000')),
    ('Kopi Susu', Decimal('10000')),
]


def seed_database(owner_username='owner', owner_password='owner123'):
    """Insert demo rows; returns False when rooms already exist"""
    if Room.query.first():
        logger.info('Database already contains data, seeding skipped')
        return False

    for tier, discount, points in MEMBERSHIPS:
        db.session.add(Membership(tier_name=tier, discount_percent=discount, bonus_points=points))

    games = [GameList(name=name) for name in GAMES]
    db.session.add_all(games)

    for name, room_type, capacity, price in ROOMS:
        room = Room(name=name, room_type=room_type, capacity=capacity)
        room.set_price(price)
        db.session.add(room)

        # PS5 in VIP rooms, PS4 elsewhere
        console = 'PS5' if room_type == RoomType.VIP.code else 'PS4'
        for number in (1, 2):
            unit = Unit(name=f'{console} {name} #{number}', room=room,
                        description=f'{console} dengan 2 stik')
            for game in games[:3] if console == 'PS4' else games:
                unit.installed_games.append(UnitGame(game=game))
            db.session.add(unit)

    for name, price in FOODS:
        db.session.add(FoodList(name=name, price=price))

    owner = User(username=owner_username, email=f'{owner_username}@rentalps.local',
                 role=UserRole.OWNER.code)
    owner.set_password(owner_password)
    db.session.add(owner)

    db.session.commit()
    logger.info('Seeded %d rooms, %d games, %d foods', len(ROOMS), len(GAMES), len(FOODS))
    return True
