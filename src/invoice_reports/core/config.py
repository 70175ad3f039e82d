import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./invoice_reports.sqlite3")

# Comma separated list, "*" allows every origin
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
# Longest startDate..endDate span accepted, in days
MAX_DATE_RANGE_DAYS: int = int(os.getenv("MAX_DATE_RANGE_DAYS", "3660"))

# Format the ingestion side writes into reports.date
REPORT_DATE_FORMAT: str = os.getenv("REPORT_DATE_FORMAT", "%d-%m-%Y")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
