"""JSON response class using orjson serialization.

ORJSONResponse is the default response class of the application, so handler
return values and error bodies are all rendered by orjson with sorted keys.

Response schemas declare snake_case fields with camelCase aliases
(``user_message`` is sent as ``userMessage``). Clients read the aliased
names, so a model passed straight to the response is dumped by alias rather
than by field name.
"""

from typing import Any, Final

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

ORJSON_OPTIONS: Final[int] = orjson.OPT_SORT_KEYS


class ORJSONResponse(JSONResponse):
    """JSON response rendered by orjson."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - any JSON-serializable content
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)
        return orjson.dumps(content, option=ORJSON_OPTIONS)
