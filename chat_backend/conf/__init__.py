"""Configuration package for the chat backend."""

from .config import Config

__all__ = ["Config"]
