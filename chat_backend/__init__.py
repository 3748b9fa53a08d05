"""
Backend package for the inline chat service.

This package contains the service components including:
- Flask application and API routes
- The message store façade and its document-store repositories
- Message data models and data URI helpers
- Configuration and utility modules
"""

import logging
import os

# Configure logging with clickable paths before anything else imports logging
logging.basicConfig(
    level=logging.INFO, format="%(levelname)s: %(pathname)s:%(lineno)d %(message)s"
)


class ClickablePathFilter(logging.Filter):
    """Filter to make file paths clickable in the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "pathname"):
            # Convert absolute path to relative path from workspace root
            workspace_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            try:
                record.pathname = os.path.relpath(record.pathname, workspace_root)
            except ValueError:
                # Path on another drive
                pass
        return True


logging.getLogger().addFilter(ClickablePathFilter())
