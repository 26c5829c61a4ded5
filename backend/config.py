"""
Application configuration - values are read from the environment (.env supported)
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent

load_dotenv(BACKEND_DIR / '.env')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return int(raw)


class Config:
    """Base configuration"""
    PORT = _env_int('PORT', 3000)

    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        f"sqlite:///{BACKEND_DIR / 'instance' / 'bim_catalog.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Comma-separated list, '*' allows any origin
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', str(BACKEND_DIR / 'uploads'))
    MAX_UPLOAD_SIZE_MB = _env_int('MAX_UPLOAD_SIZE_MB', 50)
    MAX_CONTENT_LENGTH = MAX_UPLOAD_SIZE_MB * 1024 * 1024
    ALLOWED_MODEL_EXTENSIONS = {'glb', 'obj', 'fbx'}

    DEFAULT_MODEL_NAME = 'Unnamed Model'
    DEFAULT_CATEGORY = 'Uncategorized'
    DEFAULT_DESCRIPTION = 'No description'

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    TESTING = False


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


def get_config():
    """Pick the configuration class from TESTING / FLASK_ENV"""
    if os.getenv('TESTING', '').lower() == 'true':
        return TestingConfig
    env = os.getenv('FLASK_ENV', 'production').lower()
    if env == 'development':
        return DevelopmentConfig
    return ProductionConfig
