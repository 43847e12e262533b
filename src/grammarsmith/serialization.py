"""Serialization of locations and diagnostics to JSON-compatible data.

Converts Position, Span, Spanned and Diagnostic values to/from plain dicts
whose keys match the dataclass attributes, plus a ``_type`` discriminator.
Useful for caching lexer output, shipping diagnostics to an editor, and
snapshot tests. Spanned values pass through unchanged, so they must be
JSON-compatible for to_json. The JSON round trip only reproduces values
that are already JSON-native: tuples come back as lists and non-string
dict keys come back as strings.

All JSON output is deterministic (sorted keys).

Example:
    from grammarsmith.serialization import to_json, from_json

    data = to_json(collector.diagnostics)
    restored = from_json(data)
    assert restored == list(collector.diagnostics)

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from grammarsmith.diagnostics import Diagnostic, Severity
from grammarsmith.location import Position, Span, Spanned

# Registry of type names to classes for deserialization
_TYPES: dict[str, type] = {
    "Position": Position,
    "Span": Span,
    "Spanned": Spanned,
    "Diagnostic": Diagnostic,
}


def to_dict(obj: Position | Span | Spanned | Diagnostic) -> dict[str, Any]:
    """Convert a location or diagnostic to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Raises:
        TypeError: If ``obj`` is not one of the supported types.

    """
    if type(obj).__name__ not in _TYPES:
        msg = f"Cannot serialize {type(obj).__name__}"
        raise TypeError(msg)

    result: dict[str, Any] = {"_type": type(obj).__name__}
    for f in fields(obj):
        result[f.name] = _serialize_value(getattr(obj, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, (Position, Span, Spanned, Diagnostic)):
        return to_dict(value)
    if isinstance(value, Severity):
        return value.value
    # Primitives and caller payloads pass through
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a location or diagnostic from a dict.

    Uses the ``_type`` discriminator to determine the class.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized data"
        raise ValueError(msg)

    cls = _TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)
    return cls(**kwargs)


def _deserialize_value(value: Any, field_name: str) -> Any:
    """Deserialize a single field value."""
    if field_name == "severity":
        return Severity(value)
    if isinstance(value, dict) and value.get("_type") in _TYPES:
        return from_dict(value)
    return value


def to_json(obj: Any, *, indent: int | None = None) -> str:
    """Serialize a value, or a list/tuple of values, to a JSON string.

    Args:
        obj: Position, Span, Spanned, Diagnostic, or a sequence of them
        indent: JSON indentation level (None for compact)

    """
    if isinstance(obj, (list, tuple)):
        payload: Any = [to_dict(item) for item in obj]
    else:
        payload = to_dict(obj)
    return json.dumps(payload, sort_keys=True, indent=indent)


def from_json(data: str) -> Any:
    """Deserialize a JSON string produced by to_json.

    Returns:
        A single value, or a list for serialized sequences.

    """
    raw = json.loads(data)
    if isinstance(raw, list):
        return [from_dict(item) for item in raw]
    return from_dict(raw)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
