"""Data classes module for chat messages.

Classes:
    - MessageType: Kind of message (text, image, file)
    - MessageDraft: Normalised message before it is stored
    - Message: Stored message with id and timestamp
Functions:
    - normalize_sender: Default blank sender labels
    - encode_data_uri: Inline bytes as a base64 data URI
"""

from chat_backend.src.data_classes.message import (
    Message,
    MessageDraft,
    MessageType,
    encode_data_uri,
    normalize_sender,
)

__all__ = [
    "Message",
    "MessageDraft",
    "MessageType",
    "encode_data_uri",
    "normalize_sender",
]
