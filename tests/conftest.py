"""
Pytest configuration and fixtures.
Every test gets a fresh application bound to an in-memory SQLite database.
"""
from decimal import Decimal

import pytest

from rentalps import create_app, db
from rentalps.models import FoodList, Membership, Room, User


@pytest.fixture
def app():
    """Test application with an empty schema"""
    app = create_app('test')

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def room(app):
    """VIP room at 50000 per hour"""
    room = Room(name='VIP 1', room_type='vip', capacity=6)
    room.set_price(Decimal('50000'))
    db.session.add(room)
    db.session.commit()
    return room


@pytest.fixture
def unpriced_room(app):
    room = Room(name='Reguler 9', room_type='reguler', capacity=4)
    db.session.add(room)
    db.session.commit()
    return room


@pytest.fixture
def food(app):
    food = FoodList(name='Nasi Goreng', price=Decimal('15000'))
    db.session.add(food)
    db.session.commit()
    return food


@pytest.fixture
def membership(app):
    membership = Membership(tier_name='Gold', discount_percent=10, bonus_points=25)
    db.session.add(membership)
    db.session.commit()
    return membership


def make_user(username, password, role='staff', email=None):
    user = User(username=username, email=email, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def owner(app):
    return make_user('owner', 'owner123', role='owner', email='owner@rentalps.local')


@pytest.fixture
def staff(app):
    return make_user('kasir', 'kasir123', role='staff', email='kasir@rentalps.local')


@pytest.fixture
def owner_client(client, owner):
    """Client holding the owner's auth cookies"""
    response = client.post('/api/auth/login', json={'username': 'owner', 'password': 'owner123'})
    assert response.status_code == 200
    return client


def book(client, room_id, date='2025-01-10', time='10:00', duration=2, **extra):
    """POST a backdated-allowed booking and return the response"""
    body = {'room_id': room_id, 'date': date, 'time': time, 'duration': duration,
            'allow_past': True}
    body.update(extra)
    return client.post('/api/reservations', json=body)
