from __future__ import annotations

from typing import Dict, Mapping

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .exceptions import DeserializationError, SerializationError

SessionState = Dict[str, str]

_state_adapter: TypeAdapter[SessionState] = TypeAdapter(SessionState)


class RecordCodec:
    """JSON encoding of session state. Only string-to-string maps are accepted."""

    def encode(self, state: Mapping[str, str]) -> str:
        if not isinstance(state, Mapping):
            raise SerializationError(f"Session state must be a mapping, got {type(state).__name__}")
        try:
            checked = _state_adapter.validate_python(dict(state), strict=True)
            return _state_adapter.dump_json(checked).decode("utf-8")
        except ValidationError as e:
            raise SerializationError(f"Session state is not a map of strings: {e}") from e
        except PydanticSerializationError as e:
            raise SerializationError(f"Session state cannot be written as JSON: {e}") from e

    def decode(self, payload: str) -> SessionState:
        try:
            return _state_adapter.validate_json(payload, strict=True)
        except ValidationError as e:
            raise DeserializationError(f"Stored session payload is malformed: {e}") from e
