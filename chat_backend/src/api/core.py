"""Core API setup and configuration.

This module configures API middleware, error handling, and other global API components.
"""

import logging

from flask import Flask

from chat_backend.src.api.endpoints import register_endpoints
from chat_backend.src.api.middleware import register_middleware
from chat_backend.src.services import MessageStoreService

logger = logging.getLogger(__name__)


def setup_api(app: Flask, message_service: MessageStoreService) -> None:
    """Set up API with middleware and endpoints.

    Args:
        app: Flask application
        message_service: Façade over the message collection
    """
    register_middleware(app)
    register_endpoints(app, message_service)
    logger.debug(f"Registered routes: {sorted(str(rule) for rule in app.url_map.iter_rules())}")
