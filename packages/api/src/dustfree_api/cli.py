"""
cli.py — Click CLI for host back-office tasks.

Usage:
    dustfree pending --host-id <uuid>
    dustfree export --host-id <uuid> --out cleanings.csv
    dustfree serve --port 8000
"""

from __future__ import annotations

from pathlib import Path

import click

from dustfree_shared.config import settings

from dustfree_api.utils.logging import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
def main(log_level: str) -> None:
    """Dustfree host tools."""
    configure_logging(log_level=log_level, log_format="console")


@main.command()
@click.option("--host-id", required=True, help="Host profile id")
def pending(host_id: str) -> None:
    """Show what the host owes each cleaner."""
    from dustfree_api.services import payout_service

    summary = payout_service.get_pending(host_id)
    symbol = settings.currency_symbol
    if not summary["cleaners"]:
        click.echo("Nothing owed.")
        return
    for s in summary["cleaners"]:
        click.echo(
            f"  {s['cleaner']['name']:30s} "
            f"{s['pending_count']:4d} cleanings  "
            f"{symbol}{s['pending_amount']:,.0f}"
        )
    click.echo(f"Total owed: {symbol}{summary['total_owed']:,.0f}")


@main.command()
@click.option("--host-id", required=True, help="Host profile id")
@click.option("--cleaner-id", default=None, help="Only this cleaner's cleanings")
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("cleanings.csv"),
    show_default=True,
)
def export(host_id: str, cleaner_id: str | None, out: Path) -> None:
    """Write the host's completed cleanings to CSV."""
    from dustfree_api.services import cleaning_service
    from dustfree_api.utils.export import flatten_cleaning, to_csv

    rows = cleaning_service.list_host_cleanings(host_id, cleaner_id=cleaner_id)
    out.write_text(to_csv([flatten_cleaning(r) for r in rows]), encoding="utf-8")
    log.info("cleanings_exported", host_id=host_id, rows=len(rows), path=str(out))
    click.echo(f"Wrote {len(rows)} cleanings to {out}")


@main.command()
@click.option("--host", default=settings.api_host, show_default=True)
@click.option("--port", default=settings.api_port, type=int, show_default=True)
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    log.info("api_starting", host=host, port=port)
    uvicorn.run("dustfree_api.app:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    main()
