"""``flask seed`` commands that load the demo shop data."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from bookshop.core.extensions import db
from bookshop.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from bookshop.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _hasher() -> WerkzeugPasswordHasher:
    config = current_app.config
    return WerkzeugPasswordHasher(
        method=config.get("PASSWORD_HASH_METHOD", "scrypt"),
        salt_length=int(config.get("PASSWORD_SALT_LENGTH", 16)),
    )


def _seed_or_fail(label: str) -> seed_data.SeedReport:
    try:
        return seed_data.run_all(db, _hasher())
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"{label} failed: {exc}") from exc


def _print_report(report: seed_data.SeedReport) -> None:
    click.echo("Seed summary:")
    width = max((len(table) for table in report), default=0)
    for table, tally in report.items():
        click.echo(
            f"  {table.ljust(width)}  created={tally['created']:>2}  existing={tally['existing']:>2}"
        )


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded table.")
def seed_cli(verbose: bool) -> None:
    """Load demo users and books."""
    level = logging.DEBUG if verbose else logging.INFO
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@with_appcontext
def run_command() -> None:
    """Insert demo users and books; rows that already exist are left alone."""
    _print_report(_seed_or_fail("Seeding"))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@with_appcontext
def fresh_command(yes: bool) -> None:
    """Drop every table, recreate the schema and seed it."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError("'flask seed fresh' only runs in development or testing.")
    if not yes:
        click.confirm("This drops every bookshop table, ledger included. Continue?", abort=True)

    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _print_report(_seed_or_fail("Fresh seed"))
