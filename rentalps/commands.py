"""
Flask CLI commands: flask init-db | seed-db | create-user | clear-db
"""
import click

from rentalps import db
from rentalps.models import User, UserRole
from rentalps.seed import seed_database


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create database tables"""
        db.create_all()
        click.echo('Database tables created')

    @app.cli.command('seed-db')
    def seed_db():
        """Create tables and insert demo data"""
        db.create_all()
        if seed_database():
            click.echo('Demo data added')
        else:
            click.echo('Database already contains data!')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.option('--email', default=None, help='Login email')
    @click.option('--role', type=click.Choice(UserRole.codes()), default=UserRole.STAFF.code)
    @click.password_option()
    def create_user(username, email, role, password):
        """Create a staff account"""
        if email and User.query.filter_by(email=email).first():
            raise click.ClickException(f'Email {email} is already used')

        user = User(username=username, email=email, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f'User {username} created ({role})')

    @app.cli.command('clear-db')
    @click.confirmation_option(prompt='All data will be deleted. Continue?')
    def clear_db():
        """Drop every table"""
        db.drop_all()
        click.echo('Database cleared')
