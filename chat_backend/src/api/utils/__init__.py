"""Helpers shared by the API endpoints."""
