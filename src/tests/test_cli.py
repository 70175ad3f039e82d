import asyncio

import pytest
from typer.testing import CliRunner

from invoice_reports.cli import main as cli_main
from invoice_reports.core import database
from invoice_reports.core.database import DBConnection, build_tortoise_config
from invoice_reports.features.reports.models import Report

runner = CliRunner()


@pytest.fixture(autouse=True)
def initialize_test_db():
    """The CLI opens its own connections; skip the shared in-memory DB."""
    yield


@pytest.fixture
def cli_db_config(tmp_path, monkeypatch) -> dict:
    config = build_tortoise_config(f"sqlite://{tmp_path / 'cli.sqlite3'}")
    monkeypatch.setattr(database, "TORTOISE_ORM_CONFIG", config)
    monkeypatch.setattr(cli_main, "TORTOISE_ORM_CONFIG", config)
    return config


async def _seed(config: dict):
    async with DBConnection(config=config, generate_schemas=True) as db:
        for invoice_number, name in ((100, "Rice"), (100, "Sugar"), (200, "Tea")):
            await Report.create(
                invoice_number=invoice_number, name=name, date="10-03-2024",
                payment_method="cash", gst=1.0, spl=1.0, using_db=db,
            )


def test_init_db_creates_schema(cli_db_config):
    result = runner.invoke(cli_main.app, ["init-db"])
    assert result.exit_code == 0, result.output
    assert "Schema ready" in result.output

    result = runner.invoke(cli_main.app, ["test-db-connection"])
    assert result.exit_code == 0, result.output
    assert "Found 0 report row(s)" in result.output


def test_summary_groups_invoices(cli_db_config):
    asyncio.run(_seed(cli_db_config))

    result = runner.invoke(cli_main.app, ["summary", "2024-03-01", "31-03-2024"])
    assert result.exit_code == 0, result.output
    assert "3 row(s) across 2 invoice(s)" in result.output
    assert "#100: 2 row(s), first: Rice (cash, 10-03-2024)" in result.output
    assert "#200: 1 row(s), first: Tea" in result.output


def test_summary_reports_empty_range(cli_db_config):
    asyncio.run(_seed(cli_db_config))

    result = runner.invoke(cli_main.app, ["summary", "2023-01-01", "2023-01-31"])
    assert result.exit_code == 1
    assert "No reports available" in result.output


def test_summary_rejects_bad_dates(cli_db_config):
    result = runner.invoke(cli_main.app, ["summary", "yesterday", "2024-03-31"])
    assert result.exit_code == 1
    assert "Invalid date 'yesterday'" in result.output
