"""Document-store repositories for chat messages.

Two backends implement the same collection-level protocol:

- MongoMessageRepository: a MongoDB collection accessed through pymongo
- InMemoryMessageRepository: a process-local list guarded by a thread lock,
  used for local development and tests

Both return raw documents keyed by ``_id``; converting them into ``Message``
objects is left to the service layer.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the document store cannot complete an operation."""


class MessageRepository(Protocol):
    """Repository protocol for the message collection."""

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document, letting the store assign ``_id`` and ``time``.

        Returns:
            The stored document
        """
        ...

    def find_all(self) -> List[Dict[str, Any]]:
        """Return every document, oldest first."""
        ...

    def delete_all(self) -> int:
        """Delete every document in one atomic batch.

        Returns:
            Number of deleted documents
        """
        ...


class MongoMessageRepository:
    """Message collection stored in MongoDB.

    Attributes:
        client: Shared MongoClient, created once per process
        collection: Collection holding the chat messages
    """

    def __init__(self, client: MongoClient, database: str, collection: str) -> None:
        self.client = client
        self.collection = client[database][collection]

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        # Upserting a fresh _id lets $currentDate stamp the server clock on insert
        try:
            stored = self.collection.find_one_and_update(
                {"_id": ObjectId()},
                {"$setOnInsert": document, "$currentDate": {"time": True}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(f"Insert failed: {e}") from e
        logger.debug(f"Inserted message {stored['_id']}")
        return stored

    def find_all(self) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find({}).sort([("time", ASCENDING), ("_id", ASCENDING)])
            return list(cursor)
        except PyMongoError as e:
            raise StoreError(f"Query failed: {e}") from e

    def delete_all(self) -> int:
        def delete_listed(session: ClientSession) -> int:
            ids = [
                doc["_id"]
                for doc in self.collection.find({}, {"_id": 1}, session=session)
            ]
            if not ids:
                return 0
            result = self.collection.delete_many({"_id": {"$in": ids}}, session=session)
            return result.deleted_count

        # Enumeration and deletion commit together or not at all
        try:
            with self.client.start_session() as session:
                return session.with_transaction(delete_listed)
        except PyMongoError as e:
            raise StoreError(f"Batch delete failed: {e}") from e


class InMemoryMessageRepository:
    """Message collection kept in process memory.

    Uses a thread lock so concurrent requests see whole inserts and whole
    clears only.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self._documents: List[Dict[str, Any]] = []

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        stored = dict(document)
        stored["_id"] = ObjectId()
        with self.lock:
            stored["time"] = datetime.now(timezone.utc)
            self._documents.append(stored)
        return dict(stored)

    def find_all(self) -> List[Dict[str, Any]]:
        with self.lock:
            # Values are immutable, so shallow copies keep callers off the stored dicts
            snapshot = [dict(doc) for doc in self._documents]
        # Stable sort keeps insertion order for equal timestamps
        return sorted(snapshot, key=lambda doc: doc["time"])

    def delete_all(self) -> int:
        with self.lock:
            deleted = len(self._documents)
            self._commit([])
        return deleted

    def _commit(self, documents: List[Dict[str, Any]]) -> None:
        # The whole list is replaced in one assignment
        self._documents = documents
