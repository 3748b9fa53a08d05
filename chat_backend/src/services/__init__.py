"""Services package for backend functionality.

This package contains all service components for business logic.
"""

from .factory import (
    create_message_repository,
    create_message_store_service,
    create_mongo_client,
)
from .store import (
    InMemoryMessageRepository,
    MessageRepository,
    MessageStoreService,
    MongoMessageRepository,
    StoreError,
)

__all__ = [
    # Store
    "MessageStoreService",
    "MessageRepository",
    "MongoMessageRepository",
    "InMemoryMessageRepository",
    "StoreError",
    # Factory Functions
    "create_mongo_client",
    "create_message_repository",
    "create_message_store_service",
]
