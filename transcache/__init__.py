import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    app = Flask(__name__)

    # Config
    from transcache.config import get_config
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    app.config.from_object(get_config(config_name))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)

    # Public routes only, /admin is served without CORS
    CORS(app, resources={r'^/(?!admin).*': {'origins': app.config['CORS_ORIGINS']}})

    # Create tables with error handling
    with app.app_context():
        from transcache import models  # noqa: F401 - register tables
        try:
            db.create_all()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")

    # Register routes
    from transcache.routes import register_routes
    register_routes(app)

    from transcache.errors import register_error_handlers
    register_error_handlers(app)

    return app
