import json
from typing import Any, Protocol

from rest_api.errors import BodyParseError


class BodyCodec(Protocol):
    """Structural interface for converting between body text and structured values."""

    def parse(self, text: str) -> Any: ...

    def serialize(self, value: Any) -> str: ...


class JsonBodyCodec:
    """
    JSON body codec. Parse failures surface as BodyParseError carrying
    the decoder message.
    """

    def parse(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise BodyParseError(f"Invalid JSON body: {e}") from e

    def serialize(self, value: Any) -> str:
        try:
            return json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise BodyParseError(f"Body is not JSON serializable: {e}", phase="build") from e
