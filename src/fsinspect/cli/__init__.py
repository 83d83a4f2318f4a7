"""fsinspect command line interface."""

from fsinspect.cli.typer_app import app

__all__ = ["app"]
