"""
Tests for payment status derivation and POST /api/reservations/pay/<id>.
"""
from decimal import Decimal

import pytest

from rentalps import db
from rentalps.models import Payment, PaymentStatus, Reservation, derive_payment_status
from tests.conftest import book


class TestDerivePaymentStatus:

    @pytest.mark.parametrize('amount, expected', [
        (None, PaymentStatus.UNPAID),
        (Decimal('0'), PaymentStatus.UNPAID),
        (Decimal('1'), PaymentStatus.PARTIALLY_PAID),
        (Decimal('99999'), PaymentStatus.PARTIALLY_PAID),
        (Decimal('100000'), PaymentStatus.PAID),
        (Decimal('120000'), PaymentStatus.PAID),
    ])
    def test_status(self, amount, expected):
        payment = None if amount is None else Payment(amount=amount)
        assert derive_payment_status(Decimal('100000'), payment) is expected


class TestPayReservation:

    def test_first_payment_creates_row(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']

        response = client.post(f'/api/reservations/pay/{reservation_id}')
        assert response.status_code == 201

        data = response.get_json()['data']
        assert data['payment']['total_bayar'] == 100000
        assert data['payment']['payment_method'] == 'CASH'
        assert data['reservation']['payment_status'] == 'paid'

    def test_payment_method_from_body(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        response = client.post(f'/api/reservations/pay/{reservation_id}',
                               json={'payment_method': 'qris'})
        assert response.status_code == 201
        assert response.get_json()['data']['payment']['payment_method'] == 'QRIS'

    def test_unknown_payment_method(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        response = client.post(f'/api/reservations/pay/{reservation_id}',
                               json={'payment_method': 'BITCOIN'})
        assert response.status_code == 400
        assert Payment.query.count() == 0

    def test_paying_twice_is_rejected_without_changes(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post(f'/api/reservations/pay/{reservation_id}')
        payment = Payment.query.one()
        paid_on, amount = payment.paid_on, payment.amount

        response = client.post(f'/api/reservations/pay/{reservation_id}')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Reservasi ini sudah lunas!'

        assert Payment.query.count() == 1
        payment = Payment.query.one()
        assert (payment.paid_on, payment.amount) == (paid_on, amount)

    def test_food_order_reopens_and_top_up_settles(self, client, room, food):
        """Scenario: 100000 paid, 2 x 15000 ordered, then settled again"""
        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post(f'/api/reservations/pay/{reservation_id}')

        client.post('/api/order-foods', json={
            'reservation_id': reservation_id, 'items': [{'food_id': food.id, 'jumlah': 2}],
        })
        data = client.get(f'/api/reservations/{reservation_id}').get_json()
        assert data['total_harga'] == 130000
        assert data['payment_status'] == 'partially paid'

        response = client.post(f'/api/reservations/pay/{reservation_id}')
        assert response.status_code == 200
        assert response.get_json()['data']['payment']['total_bayar'] == 130000
        assert response.get_json()['data']['reservation']['payment_status'] == 'paid'
        assert Payment.query.count() == 1

    def test_missing_reservation(self, client):
        assert client.post('/api/reservations/pay/404').status_code == 404

    def test_deleting_reservation_removes_payment(self, client, room):
        reservation_id = book(client, room.id).get_json()['id_reservation']
        client.post(f'/api/reservations/pay/{reservation_id}')

        client.delete(f'/api/reservations/{reservation_id}')
        assert db.session.get(Reservation, reservation_id) is None
        assert Payment.query.count() == 0

    def test_zero_total_cannot_be_paid(self, client):
        room_id = client.post('/api/rooms', json={
            'nama_room': 'Gratis', 'tipe_room': 'reguler', 'harga': 0,
        }).get_json()['id_room']
        reservation_id = book(client, room_id).get_json()['id_reservation']

        for _ in range(2):
            response = client.post(f'/api/reservations/pay/{reservation_id}')
            assert response.status_code == 400
        assert Payment.query.count() == 0
