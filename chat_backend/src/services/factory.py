"""Service factory module for centralized service instantiation.

This module provides factory methods for creating service instances,
keeping service initialization logic in one place.
"""

import logging
from pathlib import Path
from typing import Optional

from pymongo import MongoClient

from chat_backend.conf.config import Config
from chat_backend.src.services.store import (
    InMemoryMessageRepository,
    MessageRepository,
    MessageStoreService,
    MongoMessageRepository,
)

logger = logging.getLogger(__name__)


def resolve_mongodb_uri() -> str:
    """Return the MongoDB connection string.

    A mounted credential file (MONGODB_URI_FILE) takes precedence over the
    MONGODB_URI environment variable.
    """
    if Config.MONGODB_URI_FILE:
        uri = Path(Config.MONGODB_URI_FILE).read_text().strip()
        if not uri:
            raise ValueError(f"MongoDB credential file is empty: {Config.MONGODB_URI_FILE}")
        logger.info(f"Using MongoDB URI from {Config.MONGODB_URI_FILE}")
        return uri
    return Config.MONGODB_URI


def create_mongo_client(uri: Optional[str] = None) -> MongoClient:
    """Create the process-wide MongoDB client.

    The client owns a thread-safe connection pool and connects lazily, so
    creating it does not touch the network.

    Args:
        uri: Connection string, resolved from the configuration if None

    Returns:
        MongoClient returning timezone-aware datetimes
    """
    return MongoClient(uri or resolve_mongodb_uri(), tz_aware=True)


def create_message_repository(
    store: Optional[str] = None, client: Optional[MongoClient] = None
) -> MessageRepository:
    """Create the message repository for the configured backend.

    Args:
        store: Backend name ("mongo" or "memory"), Config.MESSAGE_STORE if None
        client: Existing MongoClient to reuse for the mongo backend

    Returns:
        Initialized message repository
    """
    store = store or Config.MESSAGE_STORE
    if store == "memory":
        logger.warning("Using in-memory message store; messages are lost on restart")
        return InMemoryMessageRepository()
    if store == "mongo":
        logger.info(
            f"Using MongoDB collection {Config.MONGODB_DATABASE}.{Config.MESSAGES_COLLECTION}"
        )
        return MongoMessageRepository(
            client or create_mongo_client(),
            Config.MONGODB_DATABASE,
            Config.MESSAGES_COLLECTION,
        )
    raise ValueError(
        f"Invalid message store: {store}. Must be one of {Config.VALID_MESSAGE_STORES}"
    )


def create_message_store_service(
    repository: Optional[MessageRepository] = None,
) -> MessageStoreService:
    """Create and configure a MessageStoreService instance.

    Args:
        repository: Repository to use, built from the configuration if None

    Returns:
        Configured MessageStoreService instance
    """
    return MessageStoreService(repository or create_message_repository())
