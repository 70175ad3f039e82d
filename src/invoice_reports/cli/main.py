import asyncio
import logging

import typer

from ..core.database import DBConnection, TORTOISE_ORM_CONFIG
from ..core.errors import ReportsError
from ..features.reports.models import Report
from ..features.reports.service import export_reports_between, parse_report_date

logger = logging.getLogger(__name__)

app = typer.Typer(name="invoice-reports", help="CLI for the Invoice Reports service.")


@app.command("init-db")
def init_db_command():
    """Creates the reports schema if it does not exist yet."""
    asyncio.run(_init_db())


async def _init_db():
    async with DBConnection(generate_schemas=True):
        typer.secho(
            f"Schema ready on {TORTOISE_ORM_CONFIG['connections']['default']}", fg=typer.colors.GREEN
        )


@app.command("test-db-connection")
def test_db_connection_command():
    """Tests the database connection and counts report rows."""
    asyncio.run(_test_db_connection())


async def _test_db_connection():
    async with DBConnection() as db:
        typer.echo("Successfully connected to the database.")
        try:
            row_count = await Report.all().using_db(db).count()
        except Exception as e:
            typer.secho(f"Error querying reports: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Found {row_count} report row(s) in the database.")


@app.command("summary")
def summary_command(
    start_date: str = typer.Argument(..., help="First day, DD-MM-YYYY or YYYY-MM-DD."),
    end_date: str = typer.Argument(..., help="Last day, inclusive."),
):
    """Prints the per-invoice grouping for a date range."""
    asyncio.run(_summary(start_date, end_date))


async def _summary(start_date: str, end_date: str):
    try:
        start, end = parse_report_date(start_date), parse_report_date(end_date)
    except ReportsError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    async with DBConnection() as db:
        try:
            export = await export_reports_between(db, start, end)
        except ReportsError as e:
            typer.secho(e.message, fg=typer.colors.YELLOW)
            raise typer.Exit(code=1)

    typer.echo(f"{export.total_reports_count} row(s) across {len(export.success)} invoice(s)")
    for group in export.success:
        first = group.first_product
        detail = f"{first.name} ({first.payment_method}, {first.date})" if first else "-"
        typer.echo(f"  #{group.invoice_number}: {group.count} row(s), first: {detail}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(3001, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
):
    """Runs the API with uvicorn."""
    import uvicorn

    uvicorn.run("invoice_reports.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
