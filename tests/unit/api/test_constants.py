"""Unit tests for API constants."""

import pytest

from src.api.constants import (
    CORRELATION_ID_HEADER,
    DURATION_FIELD,
    UNIX_TIMESTAMP_FIELD,
    UNKNOWN_ERROR_RESPONSE_MESSAGE,
)


@pytest.mark.unit
class TestAPIConstants:
    """Test API constants."""

    def test_correlation_id_header_value(self) -> None:
        """Test that the correlation ID header has the expected value."""
        assert CORRELATION_ID_HEADER == "X-Correlation-ID"

    def test_timing_field_names(self) -> None:
        """Test the names of the fields merged into JSON responses."""
        assert UNIX_TIMESTAMP_FIELD == "unixTimestamp"
        assert DURATION_FIELD == "duration"

    def test_unknown_error_message_keeps_its_spelling(self) -> None:
        """Test the masked 500 message clients already depend on."""
        assert UNKNOWN_ERROR_RESPONSE_MESSAGE == "Unkown Error"
