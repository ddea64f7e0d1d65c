"""Flask CLI commands for deterministic development database seeding."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from blog.core.extensions import db
from blog.seeds import seed_data
from blog.services._shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if config.get("DEBUG") or config.get("TESTING"):
        return
    raise click.UsageError("The 'flask seed wipe' command is restricted to non-production environments.")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("demo")
@click.option("--create-schema", is_flag=True, help="Create missing tables first.")
@click.pass_context
@with_appcontext
def demo_command(ctx: click.Context, create_schema: bool) -> None:
    """Populate the database with idempotent demo users, articles and comments."""
    verbose = bool(ctx.obj.get("verbose", False))
    if create_schema:
        db.create_all()
    try:
        summary = seed_data.run_all(verbose=verbose)
    except (SQLAlchemyError, ServiceError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("wipe")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def wipe_command(ctx: click.Context, yes: bool) -> None:
    """Remove the demo accounts together with everything they own."""
    _ensure_non_production()
    if not yes:
        click.confirm("This will delete the demo accounts and their content. Continue?", abort=True)
    try:
        removed = seed_data.wipe(verbose=bool(ctx.obj.get("verbose", False)))
    except (SQLAlchemyError, ServiceError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Wipe failed: {exc}") from exc
    click.echo(f"Removed {removed} demo account(s).")
