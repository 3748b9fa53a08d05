"""
Core package for the backend service.

This package contains the main application logic and components including:
- Message data classes
- The message store service and its repositories
- API routes, middleware and upload handling
"""
