"""Database wiring for Tortoise ORM.

The connection pool is opened once (application lifespan or CLI command)
and handed to request handlers through the ``get_db_client`` dependency;
queries run ``using_db`` on that handle instead of reaching for a
module-level client.
"""
import logging

from tortoise import BaseDBAsyncClient, Tortoise, connections

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

MODEL_MODULES = [
    "invoice_reports.features.reports.models",
    "aerich.models",  # For Aerich migrations
]


def build_tortoise_config(db_url: str = DATABASE_URL) -> dict:
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {  # App label, referenced as "models.Report"
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
    }


TORTOISE_ORM_CONFIG = build_tortoise_config()


async def get_db_client() -> BaseDBAsyncClient:
    """FastAPI dependency returning the default connection handle."""
    return connections.get("default")


class DBConnection:
    """Opens Tortoise for the duration of an ``async with`` block."""

    def __init__(self, config: dict | None = None, generate_schemas: bool = False):
        self.config = config or TORTOISE_ORM_CONFIG
        self.generate_schemas = generate_schemas

    async def __aenter__(self) -> BaseDBAsyncClient:
        await Tortoise.init(config=self.config)
        if self.generate_schemas:
            await Tortoise.generate_schemas(safe=True)  # Only creates missing tables
        logger.debug("Tortoise-ORM initialised for %s", self.config["connections"]["default"])
        return connections.get("default")

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()
