"""Service for reading and writing chat messages in the document store.

This module provides the message store façade: four operations (list, append
text, append binary, clear) translated into repository calls, with store
failures mapped onto the API error taxonomy. The façade keeps no state of its
own; consistency is delegated to the repository backend.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from chat_backend.src.api.middleware.exceptions import (
    ClearError,
    FetchError,
    ValidationError,
    WriteError,
)
from chat_backend.src.data_classes import Message, MessageDraft, MessageType
from chat_backend.src.services.store.repository import MessageRepository, StoreError

logger = logging.getLogger(__name__)


class MessageStoreService:
    """Façade over the message collection.

    Attributes:
        repository: Collection-level repository, passed in explicitly
    """

    def __init__(self, repository: MessageRepository) -> None:
        self.repository = repository

    def list_messages(self) -> List[Message]:
        """Fetch all messages ordered ascending by creation time.

        Returns:
            Full snapshot of the chat, oldest first

        Raises:
            FetchError: If the store cannot be read or returns a malformed document
        """
        try:
            documents = self.repository.find_all()
        except StoreError as e:
            logger.error(f"Error fetching messages: {str(e)}")
            raise FetchError(details=str(e)) from e

        try:
            messages = [Message.from_document(doc) for doc in documents]
        except (PydanticValidationError, KeyError) as e:
            logger.error(f"Malformed message document in store: {str(e)}")
            raise FetchError(details="Stored message has an invalid format") from e

        logger.debug(f"Fetched {len(messages)} messages")
        return messages

    def append_text(self, sender: Optional[str], content: Optional[str]) -> Message:
        """Store a text message.

        Args:
            sender: Sender label, defaults to the anonymous sender when blank
            content: Message text

        Returns:
            The stored message

        Raises:
            WriteError: If the store rejects the write
        """
        return self._store(MessageDraft.text(sender, content))

    def append_binary(
        self,
        kind: MessageType,
        sender: Optional[str],
        data: Optional[bytes],
        mime_type: Optional[str] = None,
        file_name: Optional[str] = None,
        size: Optional[int] = None,
    ) -> Message:
        """Store an image or file message with the payload inlined as a data URI.

        Size limits are not checked here; callers reject oversized uploads
        before calling.

        Args:
            kind: MessageType.IMAGE or MessageType.FILE
            sender: Sender label, defaults to the anonymous sender when blank
            data: File bytes
            mime_type: MIME type of the upload
            file_name: File name shown to recipients
            size: Payload size in bytes, defaults to len(data)

        Returns:
            The stored message

        Raises:
            ValidationError: If no payload is supplied or kind is not binary
            WriteError: If the store rejects the write
        """
        if data is None:
            raise ValidationError("No file uploaded")
        if kind not in (MessageType.IMAGE, MessageType.FILE):
            raise ValidationError(f"Unsupported binary message type: {kind}")

        draft = MessageDraft.binary(
            kind,
            sender,
            data,
            mime_type=mime_type,
            file_name=file_name,
            size=size,
        )
        return self._store(draft)

    def clear(self) -> int:
        """Delete every message in one atomic batch.

        Returns:
            Number of deleted messages

        Raises:
            ClearError: If enumeration or commit fails; nothing is deleted then
        """
        try:
            deleted = self.repository.delete_all()
        except StoreError as e:
            logger.error(f"Error clearing chat: {str(e)}")
            raise ClearError(details=str(e)) from e

        logger.info(f"Cleared chat, {deleted} messages deleted")
        return deleted

    def _store(self, draft: MessageDraft) -> Message:
        try:
            document = self.repository.insert(draft.to_document())
        except StoreError as e:
            logger.error(f"Error storing {draft.type.value} message: {str(e)}")
            raise WriteError(details=str(e)) from e

        try:
            message = Message.from_document(document)
        except (PydanticValidationError, KeyError) as e:
            logger.error(f"Malformed document returned by store: {str(e)}")
            raise WriteError(details="Stored message has an invalid format") from e

        logger.info(f"Stored {message.type.value} message {message.id} from {message.sender}")
        return message
