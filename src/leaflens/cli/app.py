"""Root Typer app with global options."""

from __future__ import annotations

from typing import Optional

import typer

from leaflens.cli.plot import plot_app

app = typer.Typer(
    name="leaflens",
    help="Leaf photo edge maps, thermograms and quality scores.",
    no_args_is_help=True,
)
app.add_typer(plot_app, name="plot", help="Generate score charts.")


def _version_callback(value: bool) -> None:
    if value:
        from leaflens import __version__

        typer.echo(f"leaflens {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
) -> None:
    """leaflens: plant-leaf image filtering and scoring."""


# Import and register commands
from leaflens.cli.analyze import analyze_cmd  # noqa: E402
from leaflens.cli.report import info  # noqa: E402
from leaflens.cli.scan import scan  # noqa: E402

app.command(name="analyze")(analyze_cmd)
app.command()(scan)
app.command()(info)
