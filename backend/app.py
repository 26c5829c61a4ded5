"""
Flask application factory for the BIM model catalog
"""
import sys
import logging
from pathlib import Path

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from config import get_config
from models import db
from controllers import model_bp, file_bp, health_bp
from utils import payload_too_large

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO'):
    """Configure the root logger once for the process"""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def _parse_origins(raw: str):
    origins = [o.strip() for o in (raw or '').split(',') if o.strip()]
    if not origins or '*' in origins:
        return '*'
    return origins


def create_app(config_class=None):
    """
    Create and configure the Flask application

    Args:
        config_class: Configuration class (defaults to get_config())
    """
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class or get_config())

    setup_logging(app.config['LOG_LEVEL'])

    CORS(
        app,
        resources={
            r"/api/*": {"origins": _parse_origins(app.config['CORS_ORIGINS'])},
            r"/uploads/*": {"origins": _parse_origins(app.config['CORS_ORIGINS'])},
        },
        methods=['GET', 'POST'],
        allow_headers=['Content-Type'],
    )

    # Ensure the upload folder and the SQLite directory exist
    Path(app.config['UPLOAD_FOLDER']).mkdir(parents=True, exist_ok=True)
    db_uri = app.config['SQLALCHEMY_DATABASE_URI']
    if db_uri.startswith('sqlite:///'):
        Path(db_uri[len('sqlite:///'):]).parent.mkdir(parents=True, exist_ok=True)

    db.init_app(app)

    app.register_blueprint(model_bp)
    app.register_blueprint(file_bp)
    app.register_blueprint(health_bp)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        logger.warning(f"Rejected oversized request (limit {app.config.get('MAX_CONTENT_LENGTH')} bytes)")
        return payload_too_large(app.config.get('MAX_CONTENT_LENGTH'))

    with app.app_context():
        # Fresh installs get their tables here; existing databases are migrated with Alembic
        db.create_all()

    logger.info(
        f"BIM model catalog initialized (uploads={app.config['UPLOAD_FOLDER']}, "
        f"max upload={app.config['MAX_UPLOAD_SIZE_MB']}MB)"
    )
    return app


def main():
    app = create_app()
    app.run(host='0.0.0.0', port=app.config['PORT'])


if __name__ == '__main__':
    main()
