"""Check resolver — turns raw registration specs into CheckEntry values.

Accepted specs:
  - a callable                      → plain function check
  - another HealthCheck             → delegated check (its own ``check()``)
  - a method name                   → looked up on the registry's context
  - a mapping {invocant?, check, label?, tags?, **params}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..errors import ConfigurationError
from .models import CheckEntry, CheckSource, describe_invocant

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("invocant", "check", "label", "tags")


def lookup(source: Any, name: str) -> Callable[..., Any] | None:
    """Find the callable called ``name`` on ``source``, or None."""
    if source is None or not name:
        return None
    if isinstance(source, CheckSource):
        return source.resolve(name)
    target = getattr(source, name, None)
    return target if callable(target) else None


def resolve_specs(specs: Iterable[Any], context: Any = None) -> list[CheckEntry]:
    """Resolve every spec; nothing is returned unless all of them resolve."""
    return [resolve_spec(spec, context) for spec in specs]


def resolve_spec(spec: Any, context: Any = None) -> CheckEntry:
    """Resolve one raw spec into a CheckEntry or raise ConfigurationError."""
    from .registry import HealthCheck

    if isinstance(spec, HealthCheck):
        return CheckEntry(check="check", invocant=spec)
    if isinstance(spec, Mapping):
        return _resolve_mapping(spec, context)
    if not spec:
        raise ConfigurationError("check parameter required")
    if isinstance(spec, str):
        return _resolve_name(spec, context)
    if callable(spec):
        return CheckEntry(check=spec)
    raise ConfigurationError(f"cannot determine what to do with {_quote(spec)}")


def _resolve_name(name: str, context: Any, **fields: Any) -> CheckEntry:
    if lookup(context, name) is None:
        raise ConfigurationError(f"cannot determine what to do with '{name}'")
    logger.debug("Resolved '%s' against %s", name, describe_invocant(context))
    return CheckEntry(check=name, invocant=context, **fields)


def _resolve_mapping(spec: Mapping[str, Any], context: Any) -> CheckEntry:
    from .registry import HealthCheck

    check = spec.get("check")
    if not check:
        raise ConfigurationError("check parameter required")

    invocant = spec.get("invocant")
    fields: dict[str, Any] = {
        "label": spec.get("label"),
        "tags": as_tags(spec.get("tags")),
        "params": {k: v for k, v in spec.items() if k not in RESERVED_KEYS},
    }

    if isinstance(check, HealthCheck):
        return CheckEntry(check="check", invocant=check, **fields)

    if isinstance(check, str):
        if invocant is None:
            return _resolve_name(check, context, **fields)
        if lookup(invocant, check) is None:
            raise ConfigurationError(f"'{describe_invocant(invocant)}' cannot '{check}'")
        return CheckEntry(check=check, invocant=invocant, **fields)

    if callable(check):
        return CheckEntry(check=check, invocant=invocant, **fields)

    raise ConfigurationError(f"cannot determine what to do with {_quote(check)}")


def as_tags(tags: Any) -> tuple[str, ...]:
    if not tags:
        return ()
    if isinstance(tags, str):
        return (tags,)
    return tuple(str(t) for t in tags)


def _quote(value: Any) -> str:
    return f"'{value}'" if isinstance(value, str) else repr(value)
