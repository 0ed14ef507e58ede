#!/usr/bin/env python3
"""
Database initialisation script (same as `flask seed-db`)
"""
import os
import sys

from dotenv import load_dotenv

from rentalps import create_app, db
from rentalps.seed import seed_database


def init_database():
    """Create tables and insert demo data"""
    load_dotenv()
    app = create_app(os.getenv('FLASK_CONFIG') or 'default')

    with app.app_context():
        print('Creating database tables...')
        db.create_all()

        if not seed_database():
            print('Database already contains data!')
            return 1

        print('Demo data added. Owner login: owner / owner123')
    return 0


if __name__ == '__main__':
    sys.exit(init_database())
