"""Database models package"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .catalog_model import CatalogModel  # noqa: E402

__all__ = ['db', 'CatalogModel']
