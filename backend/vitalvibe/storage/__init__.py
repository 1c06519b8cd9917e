"""Storage module - document store interface and implementations."""

from .interface import (
    DocumentStore,
    StorageError,
    StorageUnavailable,
    DuplicateKeyError,
    InvalidDocumentId,
)
from .local_storage import LocalStorage
from .user_storage import UserStorage

__all__ = [
    'DocumentStore', 'StorageError', 'StorageUnavailable', 'DuplicateKeyError',
    'InvalidDocumentId', 'LocalStorage', 'UserStorage',
]
