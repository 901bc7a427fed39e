from __future__ import annotations

from typing import Optional

import typer

from .util import configure_cli_logging, configure_stdio

app = typer.Typer(help="podscope: scope configuration resolution diagnostics")


@app.callback()
def _init(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for resolver diagnostics (overrides PODSCOPE_LOG_LEVEL)",
    )
):
    from podscope_core.errors import ConfigError

    configure_stdio()
    try:
        configure_cli_logging(log_level)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


from .commands import policy as policy_cmd  # noqa: E402

app.command(name="policy-matrix")(policy_cmd.policy_matrix)
app.command(name="explain")(policy_cmd.explain)


def main():
    app()
