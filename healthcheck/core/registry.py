"""HealthCheck registry — collects checks, runs them, folds their results.

Typical use::

    hc = HealthCheck(checks=[check_db, {"check": check_cache, "tags": ["fast"]}])
    hc.register(check_disk)
    report = hc.check(tags=["fast"])   # {"results": [{"status": "OK", ...}]}
"""

from __future__ import annotations

import functools
import inspect
import logging
import time
import types
import warnings
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..errors import ConfigurationError, InvalidResultWarning, UsageError
from .aggregate import should_run, worst_status
from .invoker import invoke, merge_params, normalize_result, render_value
from .models import CheckEntry, Status
from .resolver import as_tags, resolve_specs

logger = logging.getLogger(__name__)

METADATA_KEYS = ("id", "label", "runbook")


class instance_only:
    """Method decorator: calling the method on the class raises UsageError."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, obj: Any, objtype: type | None = None) -> Callable[..., Any]:
        if obj is None:
            name = self.func.__name__
            func = self.func
            owner = objtype

            def _unbound(*args: Any, **kwargs: Any) -> Any:
                if args and owner is not None and isinstance(args[0], owner):
                    return func(*args, **kwargs)
                raise UsageError(f"{name} must be called on an instance")

            return _unbound
        return types.MethodType(self.func, obj)


class _OwnMethods:
    """Check source for a HealthCheck subclass that defines its own check methods.

    Methods inherited unchanged from HealthCheck itself are not checks.
    """

    def __init__(self, registry: HealthCheck) -> None:
        self._registry = registry
        self.__name__ = type(registry).__qualname__

    def resolve(self, name: str) -> Callable[..., Any] | None:
        if name.startswith("_"):
            return None
        owner = inspect.getattr_static(type(self._registry), name, None)
        if owner is None or owner is inspect.getattr_static(HealthCheck, name, None):
            return None
        target = getattr(self._registry, name, None)
        return target if callable(target) else None


class HealthCheck:
    """Ordered registry of health checks.

    Args:
        checks: Initial specs, registered in order.
        tags: Default tags for entries that have none of their own.
        context: Where check names are looked up: a ``CheckSource``, or any
            object, class or module with callable attributes. Subclasses
            default to their own methods.
        id, label, runbook: Copied into every report.
        summarize: Add a rolled-up ``status`` to every report.
        collapse_single_result: Return a lone result merged into the report.
    """

    def __init__(
        self,
        checks: Iterable[Any] | Any = None,
        tags: Iterable[str] | None = None,
        *,
        context: Any = None,
        id: str | None = None,
        label: str | None = None,
        runbook: str | None = None,
        summarize: bool = False,
        collapse_single_result: bool = False,
    ) -> None:
        self._checks: list[CheckEntry] = []
        self._tags = list(as_tags(tags))
        if context is None and type(self) is not HealthCheck:
            context = _OwnMethods(self)
        self.context = context
        self.id = id
        self.label = label
        self.runbook = runbook
        self.summarize = summarize
        self.collapse_single_result = collapse_single_result

        if checks is None:
            return
        if _is_spec_collection(checks):
            self.register(*checks)
        else:
            self.register(checks)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} checks={len(self._checks)}>"

    @property
    def checks(self) -> tuple[CheckEntry, ...]:
        return tuple(self._checks)

    def tags(self) -> list[str]:
        """The registry's default tags, in the order given."""
        return list(self._tags)

    @instance_only
    def register(self, *specs: Any) -> HealthCheck:
        """Resolve and append checks. Returns self for chaining."""
        if not specs:
            raise ConfigurationError("check parameter required")
        entries = resolve_specs(specs, self.context)
        self._checks.extend(entries)
        for entry in entries:
            logger.debug("Registered check %s tags=%s", entry.name, list(entry.tags))
        return self

    def should_run(self, entry: CheckEntry, tags: Iterable[str] | None = None) -> bool:
        """Whether ``entry`` runs when ``tags`` are requested."""
        return should_run(entry, tags, self._tags)

    @instance_only
    def check(
        self,
        *,
        tags: Iterable[str] | None = None,
        runtime: bool = False,
        **params: Any,
    ) -> dict[str, Any]:
        """Run every matching check in registration order and fold the results.

        Invalid return values are dropped with an ``InvalidResultWarning``.
        A check that raises is reported as CRITICAL.
        """
        if not self._checks:
            raise ConfigurationError("no registered checks")

        requested = list(as_tags(tags))
        started = time.perf_counter()

        results = []
        for entry in self._checks:
            if not self.should_run(entry, requested):
                continue
            result = self._collect(entry, params, requested)
            if result is not None:
                results.append(result)

        report: dict[str, Any] = {
            key: getattr(self, key) for key in METADATA_KEYS if getattr(self, key) is not None
        }
        if self.collapse_single_result and len(results) == 1:
            report = {**results[0], **report}
        else:
            report["results"] = results
        if self.summarize:
            report.setdefault("status", worst_status(results))
        if runtime:
            report["runtime"] = round(time.perf_counter() - started, 4)
        return report

    # ── Internals ────────────────────────────────────────────────────────────

    def _collect(
        self,
        entry: CheckEntry,
        params: Mapping[str, Any],
        requested: list[str],
    ) -> dict[str, Any] | None:
        try:
            raw = self._invoke(entry, params, requested)
        except (UsageError, ConfigurationError):
            raise
        except Exception as e:
            logger.exception("Check %s raised", entry.name)
            raw = {"status": Status.CRITICAL.value, "info": f"{type(e).__name__}: {e}"}
            if entry.label is not None:
                raw["label"] = entry.label

        result = normalize_result(raw)
        if result is None:
            rendered = render_value(raw)
            logger.warning("Invalid return from %s (%s)", entry.name, rendered)
            warnings.warn(
                f"Invalid return from {entry.name} ({rendered})",
                InvalidResultWarning,
                stacklevel=_caller_stacklevel(),
            )
        return result

    @staticmethod
    def _invoke(entry: CheckEntry, params: Mapping[str, Any], requested: list[str]) -> Any:
        if isinstance(entry.invocant, HealthCheck) and entry.check == "check":
            report = entry.invocant.check(tags=requested, **merge_params(entry, params))
            report.setdefault("status", worst_status(report.get("results", ())))
            return report
        return invoke(entry, params)


def _is_spec_collection(checks: Any) -> bool:
    """True for an iterable of specs; False for a single spec."""
    if isinstance(checks, (str, Mapping, HealthCheck)) or callable(checks):
        return False
    return isinstance(checks, Iterable)


def _caller_stacklevel() -> int:
    """Stacklevel of the first frame outside this module, nested registries included."""
    frame = inspect.currentframe()
    frame = frame.f_back if frame is not None else None
    level = 1
    while frame is not None and frame.f_code.co_filename == __file__:
        frame = frame.f_back
        level += 1
    return level
