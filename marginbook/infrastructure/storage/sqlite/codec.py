"""
JSON codec for record payloads stored as TEXT columns.

Decoding never fails: text that is not valid JSON comes back unchanged so
the record can still be listed and repaired.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

M = TypeVar("M", bound=BaseModel)


def encode_payload(model: BaseModel) -> str:
    """Serialize a model to JSON text, using wire aliases (``from``)."""
    return json.dumps(model.model_dump(mode="json", by_alias=True))


def decode_payload(text: Any) -> Any:
    """Parse stored JSON text; return the input unchanged if it is not JSON."""
    if not isinstance(text, (str, bytes, bytearray)):
        return text
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return text


def decode_model(text: Any, model_cls: type[M]) -> M | str:
    """
    Decode stored text into ``model_cls``.

    Falls back to the raw text when it is not JSON or the decoded value does
    not match the model's shape.
    """
    raw = text if isinstance(text, str) else str(text)
    value = decode_payload(text)
    if not isinstance(value, dict):
        return raw
    try:
        return model_cls.model_validate(value)
    except PydanticValidationError:
        return raw
