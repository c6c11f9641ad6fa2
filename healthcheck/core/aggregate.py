"""Tag filtering and status rollup."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .models import CheckEntry, HasDefaultTags, Status


def invocant_tags(invocant: Any) -> list[str]:
    """Default tags an invocant declares for itself, if it has any."""
    if invocant is None or not isinstance(invocant, HasDefaultTags):
        return []
    if isinstance(invocant, type):
        # Only class-level ``tags`` can be called without an instance.
        attr = inspect.getattr_static(invocant, "tags", None)
        if not isinstance(attr, (classmethod, staticmethod)):
            return []
    tags = invocant.tags
    if not callable(tags) or not _takes_no_arguments(tags):
        return []
    return list(tags() or [])


def _takes_no_arguments(func: Any) -> bool:
    try:
        inspect.signature(func).bind()
    except (TypeError, ValueError):
        return False
    return True


def effective_tags(entry: CheckEntry, default_tags: Sequence[str] = ()) -> list[str]:
    """Entry tags, else the invocant's own tags, else the registry defaults."""
    if entry.tags:
        return list(entry.tags)
    return invocant_tags(entry.invocant) or list(default_tags)


def should_run(
    entry: CheckEntry,
    requested: Iterable[str] | None,
    default_tags: Sequence[str] = (),
) -> bool:
    """True if no tags were requested or any effective tag was."""
    wanted = set(requested or ())
    if not wanted:
        return True
    return any(tag in wanted for tag in effective_tags(entry, default_tags))


def worst_status(results: Iterable[Mapping[str, Any]]) -> str:
    """Worst status among results; UNKNOWN when there are none."""
    worst: Status | None = None
    for result in results:
        status = Status.coerce(result.get("status"))
        if worst is None or status.rank > worst.rank:
            worst = status
    return (worst or Status.UNKNOWN).value
