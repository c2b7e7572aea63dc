"""
Content values are stored as text. Text that looks like a JSON object or
array is treated as structured content and must parse; anything else is
free text.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .exceptions import ValidationError

STRUCTURED_PREFIXES = ("{", "[")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON value")


def loads_json(text: str) -> Any:
    """``json.loads`` restricted to standard JSON (no NaN or Infinity)."""
    return json.loads(text, parse_constant=_reject_constant)


def dumps_json(data: Any, **kwargs) -> str:
    kwargs.setdefault("ensure_ascii", False)
    try:
        return json.dumps(data, allow_nan=False, **kwargs)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Value cannot be stored as JSON: {exc}") from exc


@dataclass(frozen=True)
class PlainText:
    text: str

    def serialize(self) -> str:
        return self.text


@dataclass(frozen=True)
class Structured:
    data: Any
    source: Optional[str] = None  # original text, stored verbatim when present

    def serialize(self) -> str:
        if self.source is not None:
            return self.source
        return dumps_json(self.data, separators=(",", ":"))


ContentValue = Union[PlainText, Structured]


def looks_structured(text: str) -> bool:
    return text.strip().startswith(STRUCTURED_PREFIXES)


def validate_json_text(value: str) -> Tuple[bool, Optional[str]]:
    """Return ``(is_valid, error_message)`` for an edited field value."""
    if not looks_structured(value):
        return True, None
    try:
        loads_json(value)
    except ValueError as exc:
        return False, f"Invalid JSON: {exc}"
    return True, None


def parse_content_value(raw: Any, *, key: Optional[str] = None) -> ContentValue:
    """
    Classify a raw draft/content value.

    Raises ValidationError when text looks structured but does not parse,
    or when a non-string value has no standard JSON form.
    """
    if not isinstance(raw, str):
        value = Structured(raw)
        try:
            value.serialize()
        except ValidationError as exc:
            raise ValidationError(f"Field '{key}': {exc}" if key else str(exc), key=key) from exc
        return value

    if not looks_structured(raw):
        return PlainText(raw)

    try:
        data = loads_json(raw)
    except ValueError as exc:
        label = f"'{key}' " if key else ""
        raise ValidationError(f"Field {label}contains invalid JSON: {exc}", key=key) from exc

    return Structured(data, source=raw)


def serialize_content_value(raw: Any) -> str:
    """Text form written to the content table. Strings pass through unchanged."""
    if isinstance(raw, (PlainText, Structured)):
        return raw.serialize()
    if isinstance(raw, str):
        return raw
    return Structured(raw).serialize()


def format_json_text(value: str, indent: int = 2) -> str:
    if not looks_structured(value):
        return value
    try:
        data = loads_json(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid JSON: {exc}") from exc
    return dumps_json(data, indent=indent)
