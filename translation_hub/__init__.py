from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)


def _database_url():
    url = os.getenv('DATABASE_URL', 'sqlite:///translations.db')
    # Some hosts still hand out the legacy scheme
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def create_app(config_name='development'):
    app = Flask(__name__)

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 86400))
    app.config['EXPORT_CACHE_TTL'] = int(os.getenv('EXPORT_CACHE_TTL', 1800))  # 30 minutes
    app.config['EXPORT_SCAN_BATCH_SIZE'] = int(os.getenv('EXPORT_SCAN_BATCH_SIZE', 1000))
    app.config['SEARCH_PAGE_SIZE'] = int(os.getenv('SEARCH_PAGE_SIZE', 50))
    app.config['ERROR_404_HELP'] = False

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)

    # Create tables with error handling
    with app.app_context():
        from translation_hub import models  # noqa: F401  (registers tables)
        from translation_hub.services.version_counter import ensure_counter
        try:
            db.create_all()
            ensure_counter()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")
            logger.warning("This is OK if the database is not ready yet.")

    # Register routes
    from translation_hub.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
