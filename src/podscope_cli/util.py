from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_stdio() -> None:
    """Make CLI output robust across Windows console encodings.

    Tables use box-drawing glyphs; on a non-UTF8 console (e.g. cp1252) replace
    unencodable characters instead of aborting the command.
    """

    if os.name != "nt":
        return

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="replace")


def configure_cli_logging(log_level: Optional[str]) -> None:
    """Send podscope_core log records to stderr at the requested level."""
    from podscope_core.settings import ResolverSettings, configure_logging

    base = {"log_level": log_level} if log_level else None
    settings = ResolverSettings.from_env(base)
    package_logger = configure_logging(settings)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        )
