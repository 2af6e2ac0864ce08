"""Pydantic schema models for API responses.

- **errors**: Bodies returned for ApiErrors and untyped failures
"""
