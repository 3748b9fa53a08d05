"""API endpoints package.

This package contains endpoint definitions for the API.
"""

from flask import Flask

from chat_backend.src.api.endpoints.chat import init_chat_routes
from chat_backend.src.services import MessageStoreService


def register_endpoints(app: Flask, message_service: MessageStoreService) -> None:
    """Register all API endpoints with the application.

    Args:
        app: Flask application
        message_service: Façade over the message collection
    """
    app.register_blueprint(init_chat_routes(message_service))
