"""Invoker — calls a CheckEntry and normalizes whatever it returns."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import CheckEntry, ResultRecord, describe_invocant
from .resolver import lookup

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool, type(None))


def merge_params(entry: CheckEntry, params: Mapping[str, Any]) -> dict[str, Any]:
    """Static params overlaid by per-call params. Always a fresh dict."""
    merged = entry.static_params()
    merged.update(params)
    return merged


def invoke(entry: CheckEntry, params: Mapping[str, Any]) -> Any:
    """Call the check with the merged parameters and return its raw value."""
    merged = merge_params(entry, params)

    if isinstance(entry.check, str):
        target = lookup(entry.invocant, entry.check)
        if target is None:
            raise ConfigurationError(f"'{describe_invocant(entry.invocant)}' cannot '{entry.check}'")
        return target(**merged)

    if entry.invocant is not None:
        return entry.check(entry.invocant, **merged)
    return entry.check(**merged)


# ── Result normalization ─────────────────────────────────────────────────────


def as_fields(raw: Any) -> dict[str, Any] | None:
    """Accept a mapping or a flat key/value list; reject every other shape."""
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (list, tuple)) and raw and len(raw) % 2 == 0:
        if not all(isinstance(v, _SCALARS) for v in raw):
            return None
        keys = raw[::2]
        if not all(isinstance(k, str) for k in keys):
            return None
        return dict(zip(keys, raw[1::2]))
    return None


def normalize_result(raw: Any) -> dict[str, Any] | None:
    """Coerce a raw return value into a result record dict, or None if invalid."""
    fields = as_fields(raw)
    if fields is None or "status" not in fields:
        return None
    if isinstance(fields["status"], Enum):
        fields["status"] = fields["status"].value
    try:
        record = ResultRecord.model_validate(fields)
    except ValidationError as e:
        logger.debug("Result failed validation: %s", e)
        return None
    return {k: v for k, v in record.model_dump().items() if k in fields}


def render_value(raw: Any, limit: int = 200) -> str:
    """Best-effort, bounded rendering of a bad return value."""
    try:
        text = repr(raw)
    except Exception as e:
        text = f"<unrepresentable {type(raw).__name__}: {e}>"
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text
