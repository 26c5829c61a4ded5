"""Utils package"""
from .response import (
    success_response, error_response, bad_request, not_found, payload_too_large
)
from .errors import (
    CatalogError, ClientInputError, NotFoundError, StorageUnavailableError, PersistenceError
)

__all__ = [
    'success_response', 'error_response', 'bad_request', 'not_found', 'payload_too_large',
    'CatalogError', 'ClientInputError', 'NotFoundError', 'StorageUnavailableError', 'PersistenceError',
]
