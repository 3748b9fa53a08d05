"""Flask application for the inline chat backend."""

import argparse
import logging
import os
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS
from pymongo.errors import PyMongoError

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chat_backend.conf.config import Config
from chat_backend.src.api.core import setup_api
from chat_backend.src.services import MessageStoreService, create_message_store_service

# Logging is configured in chat_backend/__init__.py
logger = logging.getLogger(__name__)


def create_app(message_service: Optional[MessageStoreService] = None) -> Flask:
    """Create and configure the Flask application with the message store."""
    logger.info("Starting application setup...")

    app = Flask(__name__)
    CORS(app)

    # Per-file ceiling, checked by the upload routes
    app.config["MAX_UPLOAD_BYTES"] = Config.MAX_UPLOAD_BYTES
    # Bodies that cannot fit a file under the ceiling are rejected while parsing
    app.config["MAX_CONTENT_LENGTH"] = (
        Config.MAX_UPLOAD_BYTES + Config.UPLOAD_ENVELOPE_BYTES
    )

    if message_service is None:
        logger.info(f"Creating message store service ({Config.MESSAGE_STORE})")
        message_service = create_message_store_service()

    setup_api(app, message_service)
    logger.info("Application setup complete")
    return app


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run the chat backend (--port, --store, --max-upload-bytes)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Config.FLASK_PORT,
        help=f"Port to listen on (default: {Config.FLASK_PORT})",
    )
    parser.add_argument(
        "--store",
        type=str,
        choices=Config.VALID_MESSAGE_STORES,
        default=Config.MESSAGE_STORE,
        help=f"Message store backend (default: {Config.MESSAGE_STORE})",
    )
    parser.add_argument(
        "--max-upload-bytes",
        type=int,
        default=Config.MAX_UPLOAD_BYTES,
        help="Largest accepted upload in bytes (default: 200 MiB)",
    )

    args = parser.parse_args()

    Config.FLASK_PORT = args.port
    Config.MESSAGE_STORE = args.store
    Config.MAX_UPLOAD_BYTES = args.max_upload_bytes

    logger.info(f"Using message store: {Config.MESSAGE_STORE}")
    logger.info(f"Upload ceiling: {Config.MAX_UPLOAD_BYTES} bytes")

    try:
        service = create_message_store_service()
    except (OSError, ValueError, PyMongoError) as e:
        logger.error(f"Failed to initialize message store: {str(e)}")
        sys.exit(1)

    app = create_app(service)
    logger.info(f"Server running on port {Config.FLASK_PORT}")
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT)
