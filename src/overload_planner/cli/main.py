"""
CLI entry point using Typer.

Provides commands for next-session planning:
- plan: Prescribe the next session from a previous-session payload
- estimate: Both 1RM estimates for a single set
- zones: Show the training-zone presets
- rpe-table: Show the RPE → %1RM chart
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from . import views
from .app import app
from .commands import planning, reference  # noqa: F401  (registers commands)

__all__ = ["app"]


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """
    Progressive-overload planner: prescribes the next session from the last one.
    """
    if verbose:
        logger = logging.getLogger("overload_planner")
        logger.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.addHandler(RichHandler(console=views.err_console, show_path=False))


if __name__ == "__main__":
    app()
