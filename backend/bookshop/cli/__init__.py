"""``flask`` sub-commands shipped with the bookshop."""

from __future__ import annotations

from flask import Flask

from .seed import seed_cli


def init_app(app: Flask) -> None:
    """Expose ``flask seed`` on ``app``."""
    app.cli.add_command(seed_cli)
