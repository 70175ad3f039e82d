from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "reports" (
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "invoice_number" INT NOT NULL,
    "payment_method" VARCHAR(50) NOT NULL,
    "gst" REAL NOT NULL DEFAULT 0,
    "spl" REAL NOT NULL DEFAULT 0,
    "name" VARCHAR(255) NOT NULL,
    "date" VARCHAR(10) NOT NULL /* Stored as text, see REPORT_DATE_FORMAT */
);
CREATE INDEX IF NOT EXISTS "idx_reports_invoice_4f7d4c" ON "reports" ("invoice_number");
CREATE INDEX IF NOT EXISTS "idx_reports_date_7a3b1e" ON "reports" ("date");
CREATE TABLE IF NOT EXISTS "aerich" (
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSON NOT NULL
);"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        DROP TABLE IF EXISTS "reports";"""
