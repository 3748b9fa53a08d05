"""Message records stored in the chat collection.

A message is created once and never mutated. ``MessageDraft`` is the
normalised record handed to the store; ``Message`` is what the store gives
back, carrying the store-assigned ``id`` and ``time``.
"""

import base64
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chat_backend.conf.config import Config


class MessageType(str, Enum):
    """Kinds of chat message."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


def normalize_sender(sender: Optional[str]) -> str:
    """Return the sender label, falling back to the default for blank input."""
    if sender is None or not str(sender).strip():
        return Config.DEFAULT_SENDER
    return str(sender)


def encode_data_uri(data: bytes, mime_type: Optional[str] = None) -> str:
    """Embed raw bytes in a ``data:<mime>;base64,<payload>`` URI.

    Args:
        data: Raw file bytes
        mime_type: MIME type of the payload, defaults to application/octet-stream

    Returns:
        The data URI string
    """
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or Config.DEFAULT_MIME_TYPE};base64,{payload}"


class MessageDraft(BaseModel):
    """A normalised message that has not been stored yet."""

    model_config = ConfigDict(populate_by_name=True)

    type: MessageType
    sender: str = Field(Config.DEFAULT_SENDER, alias="from")
    content: str = ""
    file_name: Optional[str] = Field(None, alias="fileName")
    file_size: Optional[int] = Field(None, alias="fileSize")
    mime_type: Optional[str] = Field(None, alias="mimeType")

    @field_validator("sender", mode="before")
    @classmethod
    def default_sender(cls, v: Optional[str]) -> str:
        return normalize_sender(v)

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @classmethod
    def text(cls, sender: Optional[str], content: Optional[str]) -> "MessageDraft":
        """Build a text message draft."""
        return cls(type=MessageType.TEXT, sender=sender, content=content)

    @classmethod
    def binary(
        cls,
        kind: MessageType,
        sender: Optional[str],
        data: bytes,
        mime_type: Optional[str] = None,
        file_name: Optional[str] = None,
        size: Optional[int] = None,
    ) -> "MessageDraft":
        """Build an image or file message draft with the payload inlined.

        Args:
            kind: MessageType.IMAGE or MessageType.FILE
            sender: Raw sender label
            data: File bytes
            mime_type: MIME type of the upload
            file_name: Name shown to recipients
            size: Payload size in bytes, defaults to len(data)

        Returns:
            MessageDraft with a data URI as content
        """
        mime_type = mime_type or Config.DEFAULT_MIME_TYPE
        return cls(
            type=kind,
            sender=sender,
            content=encode_data_uri(data, mime_type),
            file_name=file_name,
            file_size=len(data) if size is None else size,
            mime_type=mime_type,
        )

    def to_document(self) -> Dict[str, Any]:
        """Convert to the document layout used in the collection."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Message(MessageDraft):
    """A stored message with its store-assigned identity and timestamp."""

    id: str
    time: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Message":
        """Create a Message from a stored document.

        Args:
            document: Document as returned by the store, keyed by ``_id``
        """
        fields = {key: value for key, value in document.items() if key != "_id"}
        return cls(id=str(document["_id"]), **fields)

    def to_json(self) -> Dict[str, Any]:
        """Convert to the JSON shape returned by the API."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
