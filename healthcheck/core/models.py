"""Typed models shared by the resolver, invoker and registry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

# ── Status vocabulary ────────────────────────────────────────────────────────


class Status(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    UNKNOWN = "UNKNOWN"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Severity, higher is worse."""
        return _RANKS[self]

    @classmethod
    def coerce(cls, value: Any) -> Status:
        """Map any status string onto the vocabulary; unrecognized is UNKNOWN."""
        try:
            return cls(str(value.value if isinstance(value, Enum) else value))
        except ValueError:
            return cls.UNKNOWN


_RANKS = {Status.OK: 0, Status.WARNING: 1, Status.UNKNOWN: 2, Status.CRITICAL: 3}


# ── Result record ────────────────────────────────────────────────────────────


class ResultRecord(BaseModel):
    """Canonical outcome of one check.

    Only ``status`` is required; any other field is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    status: str
    id: Any = None
    label: Any = None


# ── Capabilities ─────────────────────────────────────────────────────────────


@runtime_checkable
class CheckSource(Protocol):
    """A context that can look up checks by name."""

    def resolve(self, name: str) -> Callable[..., Any] | None: ...


@runtime_checkable
class HasDefaultTags(Protocol):
    """An invocant that carries its own default tags."""

    def tags(self) -> list[str]: ...


# ── Registry entry ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CheckEntry:
    """A resolved, invocable check as stored in the registry."""

    check: Callable[..., Any] | str
    invocant: Any = None
    label: str | None = None
    tags: tuple[str, ...] = ()
    params: Mapping[str, Any] = field(default_factory=dict)

    def static_params(self) -> dict[str, Any]:
        """Parameters passed on every call: extra keys plus ``label``."""
        merged = dict(self.params)
        if self.label is not None:
            merged["label"] = self.label
        return merged

    @property
    def name(self) -> str:
        """Human-readable identity used in diagnostics."""
        if isinstance(self.check, str):
            return f"{describe_invocant(self.invocant)}->{self.check}"
        qualname = getattr(self.check, "__qualname__", "")
        if not qualname or "<lambda>" in qualname:
            base = "CODE"
        else:
            base = qualname
        if self.invocant is not None:
            return f"{describe_invocant(self.invocant)}->{base}"
        return base


def describe_invocant(invocant: Any) -> str:
    if isinstance(invocant, type):
        return invocant.__qualname__
    name = getattr(invocant, "__name__", None)
    if isinstance(name, str):
        return name
    return type(invocant).__qualname__
