from __future__ import annotations

import logging
import sys
from typing import Callable

import typer

from wcag_lsp import SERVER_NAME, __version__
from wcag_lsp.exceptions import UpdateError

app = typer.Typer(add_completion=False)

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(level_name: str = "WARNING") -> logging.Logger:
    """Route package logs to stderr; stdout carries the protocol."""
    level = _LEVELS.get(level_name.strip().upper())
    if level is None:
        raise typer.BadParameter(
            f"expected one of {', '.join(_LEVELS)}", param_hint="--log-level"
        )
    logger = logging.getLogger("wcag_lsp")
    logger.setLevel(level)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    else:
        fmt = "[%(levelname)s] %(message)s"
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger


def _serve() -> None:
    from wcag_lsp.server import start

    start()


def _self_update() -> str | None:
    from wcag_lsp.updater import run_update

    return run_update()


def _run(
    *,
    version: bool,
    self_update: bool,
    log_level: str,
    serve_fn: Callable[[], None] | None = None,
    update_fn: Callable[[], "str | None"] | None = None,
) -> None:
    if version:
        typer.echo(f"{SERVER_NAME} {__version__}")
        raise typer.Exit(code=0)
    setup_logging(log_level)
    if self_update:
        try:
            tag = (update_fn or _self_update)()
        except UpdateError as exc:
            typer.echo(f"Update failed: {exc}", err=True)
            raise typer.Exit(code=1)
        if tag is None:
            typer.echo(f"{SERVER_NAME} {__version__} is up to date.")
        else:
            typer.echo(f"{SERVER_NAME} updated to {tag}.")
        raise typer.Exit(code=0)
    (serve_fn or _serve)()


@app.command()
def run(
    version: bool = typer.Option(False, "-v", "--version", help="Print the version and exit."),
    self_update: bool = typer.Option(
        False, "--self-update", help="Install the latest release and exit."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="stderr logging level."),
) -> None:
    """Serve the accessibility language server over stdio."""
    _run(version=version, self_update=self_update, log_level=log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()  # pragma: no cover
