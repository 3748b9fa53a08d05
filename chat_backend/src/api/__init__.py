"""API package for the backend service.

This package contains the API endpoints, middleware and utilities for the
backend service. Import ``setup_api`` from ``chat_backend.src.api.core``; the
service layer imports the error types from ``middleware.exceptions`` and must
not pull the endpoints in with them.
"""
