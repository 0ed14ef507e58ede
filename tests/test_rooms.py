"""
Tests for the room endpoints, the price row and cascade deletion.
"""
from rentalps import db
from rentalps.models import (GameList, OrderFood, Payment, PriceList, Reservation, Room,
                             Unit, UnitGame)
from tests.conftest import book


class TestRoomCrud:

    def test_create_with_price_round_trip(self, client):
        response = client.post('/api/rooms', json={
            'nama_room': 'VIP 3', 'tipe_room': 'vip', 'kapasitas': 6, 'harga': 45000,
        })
        assert response.status_code == 201
        room_id = response.get_json()['id_room']

        rows = client.get('/api/rooms/with-price?all=true').get_json()['data']
        row = next(row for row in rows if row['id_room'] == room_id)
        assert row['harga_per_jam'] == 45000
        assert row['price_list']['harga_per_jam'] == 45000

    def test_update_keeps_single_price_row(self, client, room):
        response = client.put(f'/api/room/{room.id}', json={'harga': 60000})
        assert response.status_code == 200
        assert response.get_json()['harga_per_jam'] == 60000
        assert PriceList.query.filter_by(room_id=room.id).count() == 1

    def test_price_added_on_update(self, client, unpriced_room):
        client.put(f'/api/rooms/{unpriced_room.id}', json={'harga': '12500'})
        assert PriceList.query.filter_by(room_id=unpriced_room.id).count() == 1

        response = book(client, unpriced_room.id, duration=2)
        assert response.get_json()['total_harga'] == 25000

    def test_validation(self, client, room):
        assert client.post('/api/rooms', json={'tipe_room': 'vip'}).status_code == 400
        assert client.post('/api/rooms', json={'nama_room': 'X', 'tipe_room': 'deluxe'}).status_code == 400
        assert client.post('/api/rooms', json={
            'nama_room': 'X', 'tipe_room': 'vip', 'harga': -1,
        }).status_code == 400
        assert client.post('/api/rooms', json={
            'nama_room': 'X', 'tipe_room': 'vip', 'harga': 'murah',
        }).status_code == 400
        assert client.put(f'/api/rooms/{room.id}', json={}).status_code == 400
        assert client.get('/api/rooms/999').status_code == 404

    def test_search_by_name_or_exact_type(self, client, room, unpriced_room):
        by_type = client.get('/api/rooms?search=reguler').get_json()['data']
        assert [row['nama_room'] for row in by_type] == ['Reguler 9']

        by_name = client.get('/api/rooms?search=VIP').get_json()['data']
        assert [row['nama_room'] for row in by_name] == ['VIP 1']

    def test_list_meta(self, client):
        for number in range(1, 13):
            client.post('/api/rooms', json={'nama_room': f'R{number}', 'tipe_room': 'reguler'})

        data = client.get('/api/rooms?page=2').get_json()
        assert data['meta'] == {'page': 2, 'limit': 10, 'total': 12, 'totalPages': 2}
        assert len(data['data']) == 2

        data = client.get('/api/rooms?limit=500').get_json()
        assert data['meta']['limit'] == 100

        data = client.get('/api/rooms?all=true').get_json()
        assert len(data['data']) == 12
        assert data['meta']['totalPages'] == 1


class TestRoomDelete:

    def test_cascades_to_everything_hanging_off_the_room(self, client, room, food):
        unit = Unit(name='PS5 #1', room=room)
        game = GameList(name='Tekken 8')
        unit.installed_games.append(UnitGame(game=game))
        db.session.add(unit)
        db.session.commit()

        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post('/api/order-foods', json={
            'reservation_id': reservation_id, 'items': [{'food_id': food.id, 'jumlah': 1}],
        })
        client.post(f'/api/reservations/pay/{reservation_id}')
        room_id = room.id

        response = client.delete(f'/api/rooms/{room_id}')
        assert response.status_code == 200

        assert db.session.get(Room, room_id) is None
        assert PriceList.query.count() == 0
        assert Reservation.query.count() == 0
        assert OrderFood.query.count() == 0
        assert Payment.query.count() == 0
        assert Unit.query.count() == 0
        assert UnitGame.query.count() == 0
        # catalog entries survive
        assert GameList.query.count() == 1

    def test_missing_room(self, client):
        assert client.delete('/api/rooms/999').status_code == 404
