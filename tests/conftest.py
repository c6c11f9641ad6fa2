"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from healthcheck import HealthCheck


class Recorder:
    """A check that remembers the params of every call."""

    def __init__(self, result: Any = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self.result = result if result is not None else {"status": "OK"}

    def __call__(self, **params: Any) -> Any:
        self.calls.append(params)
        return self.result


@pytest.fixture
def ok_check() -> Recorder:
    return Recorder()


@pytest.fixture
def recorder() -> type[Recorder]:
    return Recorder


@pytest.fixture
def registry(ok_check: Recorder) -> HealthCheck:
    """A registry with one passing check."""
    return HealthCheck(checks=[ok_check])
