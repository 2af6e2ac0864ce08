"""API-related constants."""

# HTTP Status Codes
HTTP_404_NOT_FOUND = 404
HTTP_500_INTERNAL_SERVER_ERROR = 500

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Content types
JSON_CONTENT_TYPES = {"application/json", "text/json"}

# Body returned for any failure that is not an ApiError.
# The misspelling is part of the public response contract.
UNKNOWN_ERROR_RESPONSE_MESSAGE = "Unkown Error"

# Timing fields merged into JSON responses
UNIX_TIMESTAMP_FIELD = "unixTimestamp"
DURATION_FIELD = "duration"

# Module attribute every endpoint file must export
ENDPOINT_EXPORT_NAME = "router"

# Prefix of the synthetic module names given to loaded endpoint files
ENDPOINT_MODULE_PREFIX = "_endpoints"
