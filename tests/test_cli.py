"""
Tests for the flask CLI commands and the index route.
"""
from rentalps.models import FoodList, Room, User


class TestCommands:

    def test_seed_db_once(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['seed-db'])
        assert 'Demo data added' in result.output
        assert Room.query.count() == 5
        assert all(room.price is not None for room in Room.query)
        assert FoodList.query.count() > 0
        assert User.query.filter_by(role='owner').one().check_password('owner123')

        result = runner.invoke(args=['seed-db'])
        assert 'already contains data' in result.output
        assert Room.query.count() == 5

    def test_create_user(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'dewi', '--role', 'owner',
                                     '--password', 'rahasia'])
        assert result.exit_code == 0

        user = User.query.filter_by(username='dewi').one()
        assert user.is_owner()
        assert user.check_password('rahasia')

    def test_clear_db(self, app):
        runner = app.test_cli_runner()
        runner.invoke(args=['seed-db'])
        result = runner.invoke(args=['clear-db', '--yes'])
        assert result.exit_code == 0
        assert 'Database cleared' in result.output


def test_index(client):
    data = client.get('/api/').get_json()
    assert data['status'] == 'ok'
    assert data['message'] == 'Rental PS API'
