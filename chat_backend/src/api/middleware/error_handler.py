"""Error handling middleware for API requests.

This module renders every error raised while handling a request as a JSON body.
"""

import logging
import traceback
from typing import Tuple

from flask import Flask, Response, current_app, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from chat_backend.src.api.middleware.exceptions import (
    APIError,
    ErrorResponseModel,
    UploadTooLarge,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers with the Flask application.

    Args:
        app: Flask application
    """

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_validation_error(error: PydanticValidationError) -> Tuple[Response, int]:  # type: ignore
        """Handle Pydantic validation errors.

        Args:
            error: Validation error from Pydantic

        Returns:
            JSON response with error details
        """
        logger.warning(f"Validation error: {error}")

        error_details = "\n".join([str(e) for e in error.errors()])

        response = ErrorResponseModel(
            error="Validation error", details=error_details, status_code=400
        )
        return jsonify(response.model_dump()), 400

    @app.errorhandler(RequestEntityTooLarge)
    def handle_request_too_large(error: RequestEntityTooLarge) -> Tuple[Response, int]:  # type: ignore
        """Report bodies above MAX_CONTENT_LENGTH as a client error.

        Args:
            error: Werkzeug 413 error

        Returns:
            JSON response with a 400 status
        """
        body_limit = current_app.config.get("MAX_CONTENT_LENGTH")
        file_limit = current_app.config.get("MAX_UPLOAD_BYTES", body_limit)
        logger.warning(f"Rejected request body above {body_limit} bytes")
        return UploadTooLarge(
            details=f"Maximum upload size is {file_limit} bytes"
        ).to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> Tuple[Response, int]:  # type: ignore
        """Render werkzeug HTTP errors (404, 405, ...) as JSON."""
        status_code = error.code or 500
        response = ErrorResponseModel(
            error=error.name, details=error.description, status_code=status_code
        )
        return jsonify(response.model_dump()), status_code

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError) -> Tuple[Response, int]:  # type: ignore
        """Handle custom API errors.

        Args:
            error: Custom API error

        Returns:
            JSON response with error details
        """
        if error.status_code >= 500:
            logger.error(f"API error ({error.__class__.__name__}): {error.message}")
        else:
            logger.warning(f"API error ({error.__class__.__name__}): {error.message}")
        if error.details:
            logger.error(f"Error details: {error.details}")

        return error.to_response()

    @app.errorhandler(Exception)
    def handle_exception(error: Exception) -> Tuple[Response, int]:  # type: ignore
        """Handle uncaught exceptions.

        Args:
            error: Exception that was raised

        Returns:
            JSON response with error message
        """
        logger.error(f"Unhandled exception: {str(error)}")
        logger.error(traceback.format_exc())

        # Only include detailed error info in debug mode
        details = str(error) if current_app.debug else None

        response = ErrorResponseModel(
            error="Internal server error", details=details, status_code=500
        )
        return jsonify(response.model_dump()), 500
