"""
Tests for customers and membership tiers.
"""
from rentalps import db
from rentalps.models import Customer, Membership, Reservation
from tests.conftest import book


class TestCustomers:

    def test_create_with_membership(self, client, membership):
        response = client.post('/api/customers', json={
            'nama': 'Sari', 'no_hp': '08123', 'membership_id': membership.id,
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['membership']['nama_tier'] == 'Gold'
        assert data['no_hp'] == '08123'

    def test_membership_is_optional(self, client):
        response = client.post('/api/customer', json={'nama': 'Tono'})
        assert response.status_code == 201
        assert response.get_json()['membership'] is None

    def test_unknown_membership(self, client):
        response = client.post('/api/customers', json={'nama': 'Tono', 'membership_id': 5})
        assert response.status_code == 400
        assert response.get_json()['message'] == 'membership_id tidak ditemukan'

        response = client.post('/api/customers', json={'nama': 'Tono', 'membership_id': 'x'})
        assert response.status_code == 400
        assert Customer.query.count() == 0

    def test_nama_required(self, client):
        assert client.post('/api/customers', json={'no_hp': '0812'}).status_code == 400

    def test_partial_update(self, client, membership):
        customer_id = client.post('/api/customers', json={
            'nama': 'Sari', 'no_hp': '08123',
        }).get_json()['id_customer']

        response = client.put(f'/api/customers/{customer_id}', json={'membership_id': membership.id})
        assert response.status_code == 200
        data = response.get_json()
        assert data['nama'] == 'Sari'
        assert data['membership_id'] == membership.id

        assert client.put(f'/api/customers/{customer_id}', json={}).status_code == 400
        assert client.put(f'/api/customers/{customer_id}',
                          json={'membership_id': 99}).status_code == 400
        assert client.put('/api/customers/999', json={'nama': 'X'}).status_code == 404

    def test_search_and_pages(self, client):
        for number in range(15):
            client.post('/api/customers', json={'nama': f'Pelanggan {number}',
                                                 'no_hp': f'0812{number:04d}'})
        client.post('/api/customers', json={'nama': 'Andi', 'no_hp': '0899'})

        data = client.get('/api/customers?page=2').get_json()
        assert data['meta'] == {'page': 2, 'limit': 10, 'total': 16, 'totalPages': 2}

        data = client.get('/api/customers?search=0899').get_json()
        assert [row['nama'] for row in data['data']] == ['Andi']

    def test_delete_keeps_reservations_as_walk_in(self, client, room):
        customer_id = client.post('/api/customers', json={'nama': 'Sari'}).get_json()['id_customer']
        reservation_id = book(client, room.id, customer_id=customer_id).get_json()['id_reservation']

        assert client.delete(f'/api/customers/{customer_id}').status_code == 200
        db.session.expire_all()
        assert db.session.get(Reservation, reservation_id).customer_id is None


class TestMemberships:

    def test_crud(self, client):
        response = client.post('/api/membership', json={
            'nama_tier': 'Silver', 'diskon_persen': 5, 'poin_bonus': 10,
        })
        assert response.status_code == 201
        membership_id = response.get_json()['id_membership']

        response = client.put(f'/api/membership/{membership_id}', json={'diskon_persen': 7})
        assert response.get_json() == {
            'id_membership': membership_id, 'nama_tier': 'Silver',
            'diskon_persen': 7, 'poin_bonus': 10,
        }
        assert client.get(f'/api/membership/{membership_id}').status_code == 200
        assert client.delete(f'/api/membership/{membership_id}').status_code == 200
        assert client.get(f'/api/membership/{membership_id}').status_code == 404

    def test_invalid_values(self, client):
        assert client.post('/api/membership', json={'diskon_persen': 5}).status_code == 400
        assert client.post('/api/membership', json={
            'nama_tier': 'X', 'diskon_persen': 150,
        }).status_code == 400

    def test_referenced_membership_cannot_be_deleted(self, client, membership):
        client.post('/api/customers', json={'nama': 'Sari', 'membership_id': membership.id})
        membership_id = membership.id

        response = client.delete(f'/api/membership/{membership_id}')
        assert response.status_code == 400
        assert db.session.get(Membership, membership_id) is not None
