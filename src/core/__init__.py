"""Core infrastructure package for shared application functionality.

This package provides the foundational components used across the
application:

- **config**: Centralized configuration management with environment support
- **context**: Request context and correlation ID management
- **exceptions**: ApiError model, error codes and boot-time errors
- **logging**: Loguru setup with console, JSON and file sinks
- **types**: Type aliases for better code clarity
"""
