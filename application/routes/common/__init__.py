"""
Common utilities for route handlers.

Provides shared functionality to reduce code duplication:
- Authentication helpers
- Rate limiting utilities
- Response formatting
- Request body validation
"""
