from __future__ import annotations

import typer

from .commands import get_cmd, settings_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="togglit",
        help="togglit CLI",
        no_args_is_help=True,
    )

    app.command("get")(get_cmd.get_config)
    app.add_typer(settings_cmd.app, name="settings")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
