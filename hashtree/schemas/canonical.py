"""
Schemas - Canonical JSON
File: canonical.py

Purpose: Deterministic serialization of JSON-like objects so that they can
be used as Merkle leaf items. Two objects with the same canonical form
always produce the same leaf digest.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 in UTC with a Z suffix.

    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is None:
        utc_dt = dt.replace(tzinfo=timezone.utc)
    else:
        utc_dt = dt.astimezone(timezone.utc)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce an object leaf to plain JSON values, recursively.

    Args:
        value: The object leaf, or a value nested inside it.
        path: Dotted path of value inside the leaf, used in errors.

    Returns:
        Nested dicts, lists, strings, numbers, bools and None only.

    Raises:
        CanonicalizationException: If the value contains NaN/Infinity floats
            or a type with no canonical form.
    """
    if value is None:
        return None

    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Object leaf holds a non-finite float at {path or '<root>'}: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        # Keys are sorted during serialization; None values are dropped
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Object leaf value of type {type(value).__name__} has no canonical JSON form",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    The output has sorted keys, no extra whitespace, None fields excluded,
    datetimes as ISO-8601 with Z suffix, enums as their values and bytes
    as lowercase hex.

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> from datetime import datetime
        >>> dumps_canonical({"b": 2, "a": 1, "time": datetime(2026, 1, 27, 21, 35, 0)})
        '{"a":1,"b":2,"time":"2026-01-27T21:35:00Z"}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Object leaf could not be serialized: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
