"""Services package"""
from .file_service import FileService
from . import catalog_service

__all__ = ['FileService', 'catalog_service']
