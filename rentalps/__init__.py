import logging
import os
import sqlite3

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from config import config

# Extensions
db = SQLAlchemy()
cors = CORS()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores foreign keys unless asked on every connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def create_app(config_name='default'):
    """Flask application factory"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Bind extensions to the app
    db.init_app(app)
    cors.init_app(
        app,
        resources={r'/api/*': {'origins': app.config['CORS_ORIGINS'] or '*'}},
        supports_credentials=True,
    )

    configure_logging(app)
    register_error_handlers(app)

    with app.app_context():
        from rentalps import models  # noqa: F401  (register mappers)
        from rentalps.modules import (auth, customers, dashboard, foods, games,
                                      index, memberships, order_foods,
                                      reservations, rooms, units, users)
        from rentalps.commands import register_commands
        from rentalps.utils import decorators

        app.before_request(decorators.load_current_user)

        for blueprint in (index.bp, auth.bp, dashboard.bp, reservations.bp,
                          order_foods.bp, customers.bp, customers.alias_bp,
                          foods.bp, memberships.bp, rooms.bp, rooms.alias_bp,
                          units.bp, games.bp, users.bp):
            app.register_blueprint(blueprint)

        register_commands(app)

        # Create tables
        db.create_all()

    return app


def register_error_handlers(app):
    """Translate every failure into a JSON body"""
    from rentalps.errors import ApiError

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        db.session.rollback()
        return jsonify({'message': error.message}), error.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        app.logger.warning('Integrity error: %s', error.orig)
        return jsonify({'message': 'Data refers to a missing or still-referenced record'}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return jsonify({'message': 'Internal server error'}), 500


def configure_logging(app):
    """Application logging"""
    if not app.debug and not app.testing:
        os.makedirs(app.config['LOG_DIR'], exist_ok=True)

        file_handler = logging.FileHandler(os.path.join(app.config['LOG_DIR'], 'rentalps.log'))
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger('rentalps').addHandler(file_handler)
        logging.getLogger('rentalps').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Rental PS startup')
    else:
        app.logger.setLevel(logging.DEBUG)
