"""Storage services package.

This package provides storage-related services including:
- MessageStoreService: Façade for listing, appending and clearing messages
- MongoMessageRepository: MongoDB-backed message collection
- InMemoryMessageRepository: Process-local message collection

Repositories raise StoreError; the service maps it onto API errors.
"""

from .message_store_service import MessageStoreService
from .repository import (
    InMemoryMessageRepository,
    MessageRepository,
    MongoMessageRepository,
    StoreError,
)

__all__ = [
    "MessageStoreService",
    "MessageRepository",
    "MongoMessageRepository",
    "InMemoryMessageRepository",
    "StoreError",
]
