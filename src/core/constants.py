"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Precision of the duration field added to JSON responses
DURATION_DECIMALS = 2
