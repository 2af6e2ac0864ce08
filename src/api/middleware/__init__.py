"""FastAPI middleware package for cross-cutting request/response concerns.

This package contains the request pipeline stages:

- **RequestContextMiddleware**: Manages correlation IDs and request context
- **TimingMiddleware**: Adds ``unixTimestamp`` and ``duration`` to JSON bodies
- **RequestLoggingMiddleware**: Logs each request in debug mode
- **ErrorTranslationMiddleware**: Converts escaping exceptions to JSON responses
- **not_found_handler**: Fixed 404 page for unmatched routes

Middleware are executed in this order on the way in:
1. Request context (sets up correlation IDs)
2. Timing (captures the start time)
3. Request logging (debug mode only)
4. Error translation (innermost, catches what the routes raise)
"""
