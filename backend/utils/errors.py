"""
Error types raised by the catalog services and mapped to HTTP responses by the controllers
"""


class CatalogError(Exception):
    """Base class for catalog errors"""
    status_code = 500
    error_code = 'SERVER_ERROR'

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class ClientInputError(CatalogError):
    """Missing file, invalid type or malformed id - nothing was written"""
    status_code = 400
    error_code = 'INVALID_REQUEST'


class NotFoundError(CatalogError):
    """Unknown record id or missing blob"""
    status_code = 404
    error_code = 'NOT_FOUND'


class StorageUnavailableError(CatalogError):
    """The database cannot be reached"""
    status_code = 500
    error_code = 'DATABASE_UNAVAILABLE'


class PersistenceError(CatalogError):
    """Writing the file or the record failed (partial writes are rolled back)"""
    status_code = 500
    error_code = 'PERSISTENCE_ERROR'
