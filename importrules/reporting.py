"""Console rendering of rule sets and batch outcomes using rich."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from importrules.config import get_settings
from importrules.models.result import AssetPlan, BatchResult
from importrules.overrides import DontChange
from importrules.rules import Rule, RuleSet
from importrules.rules.parser import rule_to_dict

console = Console()


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level or get_settings().log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _format_filters(rule: Rule) -> str:
    parts = []
    for name, value in rule.filters.items():
        if name in rule.apply_to_all:
            value = "all"
        parts.append(f"{name}={value}")
    if rule.platforms:
        parts.append(f"platforms={','.join(rule.platforms)}")
    return ", ".join(parts)


def _format_overrides(rule: Rule) -> str:
    document = rule_to_dict(rule)["overrides"]
    parts = [
        f"{name}={document[name]}"
        for name, override in rule.overrides.items()
        if not isinstance(override, DontChange)
    ]
    return ", ".join(parts) or "[dim]no changes[/dim]"


def display_rule_set(rule_set: RuleSet, out: Optional[Console] = None) -> None:
    """Display rules in precedence order with their filters and overrides."""
    out = out or console
    if not len(rule_set):
        out.print(f"[yellow]No {rule_set.kind} rules defined.[/yellow]")
        return

    table = Table(title=f"[bold cyan]{rule_set.kind.capitalize()} Rules[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Enabled")
    table.add_column("Filters")
    table.add_column("Overrides")
    for index, rule in enumerate(rule_set, 1):
        table.add_row(
            str(index),
            rule.name,
            "[green]yes[/green]" if rule.enabled else "[dim]no[/dim]",
            _format_filters(rule),
            _format_overrides(rule),
        )
    out.print(table)

    for warning in rule_set.warnings():
        out.print(f"[yellow]![/yellow] {warning}")


def display_plan(plans: list[AssetPlan], out: Optional[Console] = None) -> None:
    """Display the assets a batch would change."""
    out = out or console
    changed = [plan for plan in plans if plan.changed]
    out.print(f"\n[bold]{len(changed)} of {len(plans)} asset(s) would change[/bold]")
    for plan in changed:
        out.print(f"  [green]•[/green] {plan.path} [dim]({', '.join(plan.matched_rules)})[/dim]")
        for platform, name, value in plan.delta.items():
            scope = f"{platform}." if platform else ""
            out.print(f"      {scope}{name} → {value}")


def display_batch_result(result: BatchResult, out: Optional[Console] = None) -> None:
    """Display the outcome of a batch with any failed assets."""
    out = out or console
    table = Table(title="\n[bold cyan]Summary[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("Attempted", justify="right")
    table.add_column("Modified", justify="right")
    table.add_column("Unchanged", justify="right")
    table.add_column("Failed", justify="right")
    table.add_row(str(result.attempted), str(result.modified), str(result.unchanged), str(result.failure_count))
    out.print(table)

    if not result.failed:
        return
    out.print("\n[bold red]Failed Assets:[/bold red]")
    for failure in result.failed:
        out.print(f"  [red]✗[/red] {failure.path}")
        out.print(f"    [dim]{failure.reason}[/dim]")
