"""Alembic environment for the catalog database (URL taken from DATABASE_URL via config.py)"""
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# Make config and models importable when alembic runs from backend/
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import get_config
from models import db

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)


def database_url() -> str:
    """`-x url=...` on the command line wins over the application configuration."""
    return context.get_x_argument(as_dictionary=True).get('url') or get_config().SQLALCHEMY_DATABASE_URI


def context_options(url: str) -> dict:
    # SQLite cannot ALTER columns in place; batch mode recreates the table
    return {
        'target_metadata': db.metadata,
        'compare_type': True,
        'render_as_batch': url.startswith('sqlite'),
    }


def run_offline(url: str) -> None:
    context.configure(url=url, literal_binds=True, **context_options(url))
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    engine = engine_from_config({'sqlalchemy.url': url}, prefix='sqlalchemy.', poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **context_options(url))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline(database_url())
else:
    run_online(database_url())
