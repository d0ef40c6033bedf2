"""CLI entry point for cancan.

Invoked as::

    cancan [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m cancan.cli.main

Commands
--------
- rules    Validate a YAML rule file and list its rules
- check    Evaluate one permission query against a rule file
- version  Show version information
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cancan.engine import CanCan
from cancan.errors import RuleConfigError
from cancan.loader import RuleLoader, RulesConfig
from cancan.models import Record
from cancan.rules import ALL

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_rule_file(rule_file: Path) -> tuple[dict[str, Any], RulesConfig]:
    """Parse and validate a rule file, exiting with status 1 on failure."""
    try:
        with rule_file.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        config = RuleLoader({}).parse(raw, config_path=str(rule_file))
    except yaml.YAMLError as exc:
        err_console.print(f"[red]Invalid YAML:[/red] {escape(str(exc))}")
        sys.exit(1)
    except RuleConfigError as exc:
        err_console.print(f"[red]Invalid rule file:[/red] {escape(str(exc))}")
        sys.exit(1)
    return raw, config


def _placeholder_models(config: RulesConfig) -> dict[str, type[Record]]:
    """Build one Record subclass per type name used in the rule file."""
    names: set[str] = set()
    for spec in config.rules:
        names.add(spec.performer)
        if spec.target != ALL:
            names.add(spec.target)
    return {name: Record.subclass(name) for name in sorted(names)}


def _parse_attrs(raw_json: str | None, option_name: str) -> dict[str, Any]:
    if not raw_json:
        return {}
    try:
        value = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid JSON for {option_name}:[/red] {escape(str(exc))}")
        sys.exit(1)
    if not isinstance(value, dict):
        err_console.print(f"[red]{option_name} must be a JSON object.[/red]")
        sys.exit(1)
    return value


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cancan")
def cli() -> None:
    """cancan CLI: inspect and try out permission rule files."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cancan import __version__

    console.print(
        Panel(
            f"[bold]cancan[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Attribute-based authorization rules for Python objects.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


@cli.command(name="rules")
@click.argument("rule_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def rules_command(rule_file: Path) -> None:
    """Validate RULE_FILE and list the rules it declares."""
    _, config = _read_rule_file(rule_file)

    if not config.rules:
        console.print("[yellow]No rules declared.[/yellow]")
        return

    table = Table(title=f"Rules in {rule_file}", box=box.SIMPLE)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Performer", style="cyan")
    table.add_column("Actions", style="magenta")
    table.add_column("Target", style="cyan")
    table.add_column("Conditions")

    for index, spec in enumerate(config.rules, start=1):
        conditions = escape(json.dumps(spec.conditions)) if spec.conditions else "-"
        table.add_row(
            str(index),
            spec.performer,
            ", ".join(spec.actions),
            spec.target,
            conditions,
        )

    console.print(table)
    console.print(f"  Total rules: [cyan]{len(config.rules)}[/cyan]")


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("rule_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--performer", "-p", required=True, help="Performer type name.")
@click.option("--action", "-a", required=True, help="Action name to check.")
@click.option("--target", "-t", required=True, help="Target type name.")
@click.option("--attrs", "target_attrs", default=None, help="Target attributes as a JSON object.")
@click.option(
    "--performer-attrs",
    "performer_attrs",
    default=None,
    help="Performer attributes as a JSON object.",
)
@click.option(
    "--class-target",
    is_flag=True,
    default=False,
    help="Check the action against the target type itself, not an instance.",
)
def check_command(
    rule_file: Path,
    performer: str,
    action: str,
    target: str,
    target_attrs: str | None,
    performer_attrs: str | None,
    class_target: bool,
) -> None:
    """Check whether PERFORMER may run ACTION on TARGET under RULE_FILE."""
    raw, config = _read_rule_file(rule_file)
    models = _placeholder_models(config)

    # Types only named on the command line still get a model so the query
    # can be answered (usually with DENIED).
    for name in (performer, target):
        models.setdefault(name, Record.subclass(name))

    engine = CanCan()
    RuleLoader(models).load_from_dict(raw, engine, config_path=str(rule_file))

    performer_obj = models[performer](_parse_attrs(performer_attrs, "--performer-attrs"))
    if class_target:
        target_obj: Any = models[target]
    else:
        target_obj = models[target](_parse_attrs(target_attrs, "--attrs"))

    allowed = engine.can(performer_obj, action, target_obj)
    status_str = "[green]ALLOWED[/green]" if allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Permission Check Result", border_style="blue"))
    console.print(f"  Query: [cyan]{performer}[/cyan] {action} [cyan]{escape(repr(target_obj))}[/cyan]")

    sys.exit(0 if allowed else 1)


if __name__ == "__main__":
    cli()
