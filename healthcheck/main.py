"""Probe runner — run a HealthCheck from the command line.

    python -m healthcheck run myapp.health:registry --tag fast --param env=prod

Exit status: 0 when the rolled-up status is OK, 1 otherwise, 2 when the
registry cannot be loaded or run.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from .config import settings
from .core.aggregate import worst_status
from .core.models import Status
from .core.registry import HealthCheck
from .errors import HealthCheckError

console = Console()
logger = logging.getLogger(__name__)

STATUS_STYLES = {
    Status.OK.value: "bold green",
    Status.WARNING.value: "bold yellow",
    Status.UNKNOWN.value: "bold magenta",
    Status.CRITICAL.value: "bold red",
}


def load_registry(target: str) -> HealthCheck:
    """Import ``module:attribute``; the attribute is a HealthCheck or a factory for one."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise HealthCheckError(f"Expected module:attribute, got '{target}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise HealthCheckError(f"Cannot import '{module_name}': {e}") from e

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise HealthCheckError(f"'{module_name}' has no attribute '{attr}'") from e

    if not isinstance(obj, HealthCheck) and callable(obj):
        obj = obj()
    if not isinstance(obj, HealthCheck):
        raise HealthCheckError(f"'{target}' is not a HealthCheck")
    return obj


def parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise HealthCheckError(f"Expected key=value, got '{pair}'")
        params[key] = value
    return params


def render_report(report: dict[str, Any]) -> None:
    """Print a report as a status line plus a table of results."""
    status = report.get("status", Status.UNKNOWN.value)
    title = report.get("label") or report.get("id") or "Health"
    console.print(f"[bold]{title}[/bold]: [{STATUS_STYLES.get(status, 'bold')}]{status}[/]")

    results = report.get("results")
    if results is None:
        results = [report]
    if not results:
        console.print("[dim]No checks matched.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status")
    table.add_column("ID")
    table.add_column("Label")
    table.add_column("Info")
    for r in results:
        r_status = str(r.get("status", ""))
        table.add_row(
            f"[{STATUS_STYLES.get(r_status, 'bold')}]{r_status}[/]",
            str(r.get("id", "")),
            str(r.get("label", "")),
            str(r.get("info", "")),
        )
    console.print(table)

    if "runtime" in report:
        console.print(f"[dim]Runtime: {report['runtime']}s[/dim]")


def run_probe(target: str, tags: list[str], params: dict[str, str], runtime: bool, as_json: bool) -> int:
    """Run the registry once and return the process exit status."""
    try:
        registry = load_registry(target)
        report = registry.check(tags=tags, runtime=runtime, **params)
    except HealthCheckError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 2

    report.setdefault("status", worst_status(report.get("results", ())))

    if as_json:
        print(json.dumps(report, indent=2, default=str))
    else:
        render_report(report)

    return 0 if report["status"] == Status.OK.value else 1


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Health check probe runner")
    sub = parser.add_subparsers(dest="command")

    run_parser = sub.add_parser("run", help="Run a registry's checks once")
    run_parser.add_argument("target", help="module:attribute of a HealthCheck or factory")
    run_parser.add_argument("--tag", action="append", default=[], help="Only run checks with this tag")
    run_parser.add_argument("--param", action="append", default=[], help="key=value passed to every check")
    run_parser.add_argument("--runtime", action="store_true", help="Report total runtime")
    run_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    args = parser.parse_args(argv)

    if args.command == "run":
        try:
            params = parse_params(args.param)
        except HealthCheckError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            sys.exit(2)
        tags = args.tag or settings.tags
        sys.exit(run_probe(args.target, tags, params, args.runtime, args.json))
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
