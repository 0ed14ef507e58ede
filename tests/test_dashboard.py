"""
Tests for the dashboard rollups.
"""
from datetime import date, datetime, timedelta

from tests.conftest import book


def book_now(client, room_id, **extra):
    start = datetime.now() - timedelta(minutes=30)
    return book(client, room_id, date=start.strftime('%Y-%m-%d'),
                time=start.strftime('%H:%M'), duration=2, **extra)


class TestStats:

    def test_cards(self, client, room, unpriced_room):
        paid_id = book(client, room.id, time='10:00', duration=2,
                       customer_name='Budi').get_json()['id_reservation']
        book(client, room.id, time='13:00', duration=1)
        book_now(client, unpriced_room.id)
        client.post(f'/api/reservations/pay/{paid_id}')

        data = client.get('/api/dashboard/stats').get_json()
        assert data == {
            'revenue': 'Rp 100.000',
            'activeRooms': '1 / 2',
            'members': '1',
            'issues': '2',
        }

    def test_recent_and_active_rooms(self, client, room):
        for hour in (8, 10, 12, 14):
            book(client, room.id, time=f'{hour:02d}:00', duration=1)

        recent = client.get('/api/dashboard/recent').get_json()
        assert len(recent) == 3
        assert recent[0]['time'].startswith('2025-01-10 14:00:00')
        assert recent[0]['status'] == 'unpaid'
        assert recent[0]['user'] == 'Unknown'

        assert client.get('/api/dashboard/active-rooms').get_json() == []


class TestRevenue:

    def test_detail_splits_room_and_food(self, client, room, food):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post('/api/order-foods', json={
            'reservation_id': reservation_id, 'items': [{'food_id': food.id, 'jumlah': 2}],
        })
        client.post(f'/api/reservations/pay/{reservation_id}', json={'payment_method': 'QRIS'})
        book(client, room.id, time='15:00')

        data = client.get('/api/dashboard/revenue-detail').get_json()
        assert len(data['rows']) == 1
        row = data['rows'][0]
        assert row['amount'] == 130000
        assert row['foodTotal'] == 30000
        assert row['roomTotal'] == 100000
        assert row['method'] == 'QRIS'
        assert row['foods'] == [{'name': 'Nasi Goreng', 'qty': 2, 'price': 15000, 'subtotal': 30000}]
        assert data['totalRevenue'] == 130000

    def test_trend_is_zero_filled(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post(f'/api/reservations/pay/{reservation_id}')

        series = client.get('/api/dashboard/revenue-trend?days=5').get_json()
        assert len(series) == 5
        assert series[-1] == {'date': date.today().strftime('%Y-%m-%d'), 'total': 100000}
        assert all(point['total'] == 0 for point in series[:-1])

        assert len(client.get('/api/dashboard/revenue-trend?days=90').get_json()) == 30
        assert len(client.get('/api/dashboard/revenue-trend').get_json()) == 7
