"""Tests for tag filtering and status rollup."""

from __future__ import annotations

from typing import Any

import pytest

from healthcheck import CheckEntry, Status
from healthcheck.core.aggregate import effective_tags, invocant_tags, should_run, worst_status


def noop(**params: Any) -> None:
    return None


class Tagged:
    def tags(self) -> list[str]:
        return ["own"]


class ClassTagged:
    @classmethod
    def tags(cls) -> list[str]:
        return ["class"]


class InstanceTagged:
    def tags(self) -> list[str]:
        return ["instance"]


class AttributeTags:
    tags = ["not", "callable"]


class ArgumentTags:
    def tags(self, kind: str) -> list[str]:
        return [kind]


class OptionalArgumentTags:
    def tags(self, kind: str = "optional") -> list[str]:
        return [kind]


# ── Effective tags ───────────────────────────────────────────────────────────


class TestEffectiveTags:
    def test_entry_tags_first(self) -> None:
        entry = CheckEntry(check="x", invocant=Tagged(), tags=("mine",))
        assert effective_tags(entry, ["default"]) == ["mine"]

    def test_invocant_tags(self) -> None:
        entry = CheckEntry(check="x", invocant=Tagged())
        assert effective_tags(entry, ["default"]) == ["own"]

    def test_registry_default(self) -> None:
        assert effective_tags(CheckEntry(check=noop), ["default"]) == ["default"]

    def test_nothing(self) -> None:
        assert effective_tags(CheckEntry(check=noop)) == []

    def test_class_level_tags(self) -> None:
        assert invocant_tags(ClassTagged) == ["class"]

    def test_instance_tags_on_class_ignored(self) -> None:
        assert invocant_tags(InstanceTagged) == []

    def test_non_callable_tags_ignored(self) -> None:
        assert invocant_tags(AttributeTags()) == []

    def test_tags_needing_arguments_ignored(self) -> None:
        assert invocant_tags(ArgumentTags()) == []

    def test_tags_with_defaults_used(self) -> None:
        assert invocant_tags(OptionalArgumentTags()) == ["optional"]

    def test_argument_tags_fall_back_to_default(self) -> None:
        entry = CheckEntry(check="x", invocant=ArgumentTags())
        assert effective_tags(entry, ["default"]) == ["default"]


# ── should_run ───────────────────────────────────────────────────────────────


class TestShouldRun:
    @pytest.mark.parametrize("requested", [None, [], ()])
    def test_nothing_requested(self, requested: Any) -> None:
        assert should_run(CheckEntry(check=noop, tags=("a",)), requested)

    def test_any_tag_matches(self) -> None:
        entry = CheckEntry(check=noop, tags=("fast", "cheap"))
        assert should_run(entry, ["cheap", "other"])

    def test_no_overlap(self) -> None:
        assert not should_run(CheckEntry(check=noop, tags=("fast",)), ["slow"])

    def test_untagged_without_default(self) -> None:
        assert not should_run(CheckEntry(check=noop), ["fast"])

    def test_untagged_with_default(self) -> None:
        assert should_run(CheckEntry(check=noop), ["default"], ["default"])


# ── Status rollup ────────────────────────────────────────────────────────────


class TestWorstStatus:
    def test_empty_is_unknown(self) -> None:
        assert worst_status([]) == "UNKNOWN"

    def test_all_ok(self) -> None:
        assert worst_status([{"status": "OK"}, {"status": "OK"}]) == "OK"

    def test_ordering(self) -> None:
        assert worst_status([{"status": "WARNING"}, {"status": "OK"}]) == "WARNING"
        assert worst_status([{"status": "UNKNOWN"}, {"status": "WARNING"}]) == "UNKNOWN"
        assert worst_status([{"status": "CRITICAL"}, {"status": "UNKNOWN"}]) == "CRITICAL"

    def test_unrecognized_counts_as_unknown(self) -> None:
        assert worst_status([{"status": "OK"}, {"status": "DEGRADED"}]) == "UNKNOWN"

    def test_status_coerce(self) -> None:
        assert Status.coerce("OK") is Status.OK
        assert Status.coerce(Status.CRITICAL) is Status.CRITICAL
        assert Status.coerce(None) is Status.UNKNOWN
        assert Status.OK.rank < Status.WARNING.rank < Status.UNKNOWN.rank < Status.CRITICAL.rank
