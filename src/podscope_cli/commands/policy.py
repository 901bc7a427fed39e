"""Show how start policies combine across scopes."""

from __future__ import annotations

import json
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from podscope_core.configuration import should_override_start_policy
from podscope_core.errors import ConfigValidationError
from podscope_core.models import ServerStartPolicy
from podscope_core.validation import parse_start_policy

console = Console()

UNSET = "unset"


def _label(policy: Optional[ServerStartPolicy]) -> str:
    return UNSET if policy is None else policy.value


def _parse(value: str) -> Optional[ServerStartPolicy]:
    if value.strip().lower() == UNSET:
        return None
    return parse_start_policy(value.strip().upper())


def decide(
    policy: Optional[ServerStartPolicy], fallback_policy: Optional[ServerStartPolicy]
) -> Tuple[Optional[ServerStartPolicy], bool]:
    """Resulting policy of a scope after filling from its fallback, and whether it changed hands."""
    if should_override_start_policy(policy, fallback_policy):
        return fallback_policy, True
    return policy, False


def policy_matrix(
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table|json"),
):
    """Show the resulting start policy for every scope/fallback combination."""
    choices: List[Optional[ServerStartPolicy]] = [None, *ServerStartPolicy]

    if output_format == "json":
        rows = []
        for policy in choices:
            for fallback_policy in choices:
                result, overridden = decide(policy, fallback_policy)
                rows.append(
                    {
                        "policy": _label(policy),
                        "fallback": _label(fallback_policy),
                        "result": _label(result),
                        "overridden": overridden,
                    }
                )
        typer.echo(json.dumps(rows, indent=2))
        return

    if output_format != "table":
        typer.echo(f"Error: unknown format: {output_format}", err=True)
        raise typer.Exit(code=2)

    table = Table(title="Start policy after fill-in (rows: scope, columns: fallback)")
    table.add_column("scope \\ fallback", style="bold")
    for fallback_policy in choices:
        table.add_column(_label(fallback_policy))

    for policy in choices:
        cells = []
        for fallback_policy in choices:
            result, overridden = decide(policy, fallback_policy)
            cells.append(f"[green]{_label(result)}[/green]" if overridden else _label(result))
        table.add_row(_label(policy), *cells)

    console.print(table)
    console.print("[dim]Green: taken from the fallback scope[/dim]")


def explain(
    policy: str = typer.Argument(..., help="Start policy of the more specific scope, or 'unset'"),
    fallback_policy: str = typer.Argument(..., help="Start policy of the broader scope, or 'unset'"),
    output_format: str = typer.Option("plain", "--format", help="plain|json"),
):
    """Explain the start policy a scope ends up with after filling from its fallback."""
    try:
        parsed = _parse(policy)
        parsed_fallback = _parse(fallback_policy)
    except ConfigValidationError as e:
        typer.echo(f"Error: {'; '.join(e.errors)}", err=True)
        raise typer.Exit(code=2)

    result, overridden = decide(parsed, parsed_fallback)

    if parsed_fallback == ServerStartPolicy.ADMIN_ONLY:
        reason = "ADMIN_ONLY in the fallback scope never propagates"
    elif parsed is None:
        reason = "the scope has no policy of its own"
    elif parsed == ServerStartPolicy.NEVER and parsed_fallback is None:
        reason = "the fallback scope has no policy, so NEVER stands"
    elif parsed == ServerStartPolicy.NEVER:
        reason = "NEVER in the scope yields to the fallback scope"
    else:
        reason = "the scope's own policy wins"

    if output_format == "json":
        typer.echo(
            json.dumps(
                {
                    "policy": _label(parsed),
                    "fallback": _label(parsed_fallback),
                    "result": _label(result),
                    "overridden": overridden,
                    "reason": reason,
                }
            )
        )
    else:
        typer.echo(f"{_label(parsed)} <- {_label(parsed_fallback)}: {_label(result)} ({reason})")
