"""Type aliases for dynamic data structures throughout the application.

All types defined here are JSON-serializable so they can be logged and
returned in API responses.
"""

# JSON-compatible type that represents any valid JSON value
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

# Top-level JSON object, as returned by most endpoints
type JsonObject = dict[str, JsonValue]
