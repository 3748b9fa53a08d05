"""Configuration module for the backend."""

import os
from pathlib import Path
from typing import List, Optional


class ConfigMeta(type):
    """Metaclass to prevent direct instantiation and enforce singleton attributes."""

    def __call__(cls, *args: object, **kwargs: object) -> None:
        """Prevent direct instantiation."""
        raise TypeError("Config cannot be instantiated directly. Use class attributes.")


class Config(metaclass=ConfigMeta):
    """Singleton configuration class. Access attributes directly via the class."""

    # =========================================================================
    # Path Configuration
    # =========================================================================
    BASE_DIR: Path = Path(__file__).parent.parent.parent

    # =========================================================================
    # Server Configuration
    # =========================================================================
    FLASK_PORT: int = int(os.getenv("PORT", "8080"))
    FLASK_HOST: str = "0.0.0.0"

    # =========================================================================
    # Message Store Configuration
    # =========================================================================
    MESSAGE_STORE: str = os.getenv("MESSAGE_STORE", "mongo")  # Options: mongo, memory
    VALID_MESSAGE_STORES: List[str] = ["mongo", "memory"]

    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    # Mounted credential file; its content replaces MONGODB_URI when set
    MONGODB_URI_FILE: Optional[str] = os.getenv("MONGODB_URI_FILE")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "chat")
    MESSAGES_COLLECTION: str = os.getenv("MESSAGES_COLLECTION", "messages")

    # =========================================================================
    # Message Configuration
    # =========================================================================
    DEFAULT_SENDER: str = "anonymous"
    DEFAULT_MIME_TYPE: str = "application/octet-stream"

    # Uploads above this size are rejected before reaching the store
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(200 * 1024 * 1024)))
    # Room for multipart boundaries, part headers and the text fields
    UPLOAD_ENVELOPE_BYTES: int = 1024 * 1024

    if MESSAGE_STORE not in VALID_MESSAGE_STORES:
        raise ValueError(
            f"Invalid message store: {MESSAGE_STORE}. Must be one of {VALID_MESSAGE_STORES}"
        )
