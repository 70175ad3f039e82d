"""
Reports Service Module

Read-only queries over the ``reports`` table. Every listing endpoint is the
same aggregation with a different filter predicate: count the matching
rows, group them by invoice number, pick a representative row per invoice
and paginate the groups. ``aggregate_reports`` implements that once; the
``get_*`` functions only choose the predicate and shape the response.
"""

import datetime
import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from tortoise import BaseDBAsyncClient
from tortoise.expressions import Q
from tortoise.functions import Count, Min

from ...core import config
from ...core.errors import InvalidParameterError, ReportsNotFoundError
from .models import Report
from .schemas import (
    CountAll, InvoiceCount, InvoiceGroup, InvoiceReportsResponse,
    ReportRow, ReportsByNameResponse, ReportsExportResponse, ReportsPageResponse
)

logger = logging.getLogger(__name__)

ISO_DATE_FORMAT = "%Y-%m-%d"

NO_REPORTS_MESSAGE = "No reports available for the given criteria."
NO_INVOICE_REPORTS_MESSAGE = "No reports available for the given invoice number."
NO_PRODUCTS_MESSAGE = "No products found for the provided name."
PAGE_NOT_FOUND_MESSAGE = "Page not found."


@dataclass
class Pagination:
    page: int
    max_result: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.max_result


@dataclass
class ReportAggregate:
    groups: List[InvoiceGroup]
    invoice_counts: List[InvoiceCount]
    total_count: int
    total_pages: int
    page: int


# --- Dates ---

def today_utc() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def format_report_date(value: datetime.date) -> str:
    """Renders a date the way it is stored in ``reports.date``."""
    return value.strftime(config.REPORT_DATE_FORMAT)


def parse_report_date(value: str) -> datetime.date:
    """
    Parses a date query parameter.

    Accepts the storage format (``REPORT_DATE_FORMAT``) as well as ISO
    ``YYYY-MM-DD``.

    Raises:
        InvalidParameterError: if the value matches neither format.
    """
    text = value.strip()
    for fmt in (config.REPORT_DATE_FORMAT, ISO_DATE_FORMAT):
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidParameterError(
        f"Invalid date '{value}'. Expected {config.REPORT_DATE_FORMAT} or {ISO_DATE_FORMAT}."
    )


def _sorts_as_text(fmt: str) -> bool:
    # Year, month, day with a fixed separator compare correctly as strings
    return re.fullmatch(r"%Y(\W?)%m\1%d", fmt) is not None


# --- Filter predicates ---

def today_filter(today: Optional[datetime.date] = None) -> Q:
    return Q(date=format_report_date(today or today_utc()))


def date_range_filter(start: datetime.date, end: datetime.date) -> Q:
    """
    Inclusive date range over the text ``date`` column.

    Sortable storage formats get a plain BETWEEN-style comparison. Day-first
    formats do not order correctly as text, so the range is expanded into
    the list of formatted days instead.
    """
    if start > end:
        raise InvalidParameterError("startDate must not be after endDate.")
    if (end - start).days >= config.MAX_DATE_RANGE_DAYS:
        raise InvalidParameterError(
            f"Date range too large. At most {config.MAX_DATE_RANGE_DAYS} days can be requested."
        )
    if _sorts_as_text(config.REPORT_DATE_FORMAT):
        return Q(date__gte=format_report_date(start), date__lte=format_report_date(end))
    days = (end - start).days
    return Q(date__in=[format_report_date(start + datetime.timedelta(days=n)) for n in range(days + 1)])


def invoice_filter(invoice_number: int) -> Q:
    return Q(invoice_number=invoice_number)


def name_filter(name: str) -> Q:
    return Q(name__contains=name)


# --- Aggregation ---

async def _first_rows_by_invoice(
    db: BaseDBAsyncClient, invoice_numbers: List[int]
) -> Dict[int, ReportRow]:
    """Lowest-id row of each invoice, regardless of the listing filter."""
    if not invoice_numbers:
        return {}
    first_ids = await (
        Report.filter(invoice_number__in=invoice_numbers).using_db(db)
        .annotate(first_id=Min("id"))
        .group_by("invoice_number")
        .values_list("first_id", flat=True)
    )
    rows = await Report.filter(id__in=list(first_ids)).using_db(db)
    return {row.invoice_number: ReportRow.model_validate(row) for row in rows}


async def aggregate_reports(
    db: BaseDBAsyncClient,
    predicate: Q,
    pagination: Optional[Pagination] = None,
    empty_message: str = NO_REPORTS_MESSAGE,
) -> ReportAggregate:
    """
    Counts, groups by invoice and paginates the rows matching ``predicate``.

    Args:
        db: Connection handle the queries run on.
        predicate: Filter applied before any aggregation.
        pagination: Page of invoice groups to return. ``None`` returns every
            group on a single page.
        empty_message: Message of the 404 raised when nothing matches.

    Returns:
        ReportAggregate with the page of groups, the full per-invoice count
        list, the total row count and ``ceil(total_count / max_result)``
        pages.

    Raises:
        ReportsNotFoundError: if the requested page holds no groups, or if
            it lies beyond the last page.
    """
    matching = Report.filter(predicate).using_db(db)
    total_count = await matching.count()
    counts = await (
        matching.annotate(count=Count("id"))
        .group_by("invoice_number")
        .order_by("invoice_number")
        .values("invoice_number", "count")
    )
    invoice_counts = [
        InvoiceCount(invoice_number=row["invoice_number"], count=CountAll(total=row["count"]))
        for row in counts
    ]

    if pagination is None:
        page_counts = counts
        page = 1
        total_pages = 1 if counts else 0
    else:
        page_counts = counts[pagination.offset:pagination.offset + pagination.max_result]
        page = pagination.page
        total_pages = math.ceil(total_count / pagination.max_result)

    first_rows = await _first_rows_by_invoice(db, [row["invoice_number"] for row in page_counts])
    groups = [
        InvoiceGroup(
            invoice_number=row["invoice_number"],
            count=row["count"],
            first_product=first_rows.get(row["invoice_number"]),
        )
        for row in page_counts
    ]
    logger.debug(
        f"Aggregated {total_count} report rows into {len(counts)} invoices, "
        f"returning {len(groups)} on page {page}/{total_pages}"
    )

    if not groups:
        raise ReportsNotFoundError(empty_message)
    # Unreachable while total_pages counts rows: groups never outnumber rows
    if page > total_pages:
        raise ReportsNotFoundError(PAGE_NOT_FOUND_MESSAGE)

    return ReportAggregate(
        groups=groups,
        invoice_counts=invoice_counts,
        total_count=total_count,
        total_pages=total_pages,
        page=page,
    )


# --- Endpoint queries ---

async def get_todays_reports(db: BaseDBAsyncClient, pagination: Pagination) -> ReportsPageResponse:
    aggregate = await aggregate_reports(db, today_filter(), pagination)
    return _to_page_response(aggregate)


async def get_reports_between(
    db: BaseDBAsyncClient,
    start_date: datetime.date,
    end_date: datetime.date,
    pagination: Pagination,
) -> ReportsPageResponse:
    aggregate = await aggregate_reports(db, date_range_filter(start_date, end_date), pagination)
    return _to_page_response(aggregate)


async def get_invoice_reports(
    db: BaseDBAsyncClient, invoice_number: int, pagination: Pagination
) -> InvoiceReportsResponse:
    """
    Lists the raw rows of one invoice.

    Grouping would collapse to a single group here, so the rows themselves
    are paginated.
    """
    matching = Report.filter(invoice_filter(invoice_number)).using_db(db)
    rows = await matching.order_by("id").offset(pagination.offset).limit(pagination.max_result)
    total_count = await matching.count()

    if not rows:
        raise ReportsNotFoundError(NO_INVOICE_REPORTS_MESSAGE)

    total_pages = math.ceil(total_count / pagination.max_result)
    if pagination.page > total_pages:
        raise ReportsNotFoundError(PAGE_NOT_FOUND_MESSAGE)

    return InvoiceReportsResponse(
        success=[ReportRow.model_validate(row) for row in rows],
        total_reports_count=total_count,
        total_pages=total_pages,
        current_page=pagination.page,
    )


async def get_reports_by_name(
    db: BaseDBAsyncClient, name: str, pagination: Pagination
) -> ReportsByNameResponse:
    aggregate = await aggregate_reports(db, name_filter(name), pagination, empty_message=NO_PRODUCTS_MESSAGE)
    return ReportsByNameResponse(
        success=aggregate.groups,
        total_products=aggregate.total_count,
        total_pages=aggregate.total_pages,
        current_page=aggregate.page,
        count_by_invoice=aggregate.invoice_counts,
    )


async def export_reports_between(
    db: BaseDBAsyncClient, start_date: datetime.date, end_date: datetime.date
) -> ReportsExportResponse:
    """Every invoice group in the range, unpaginated, as used for PDF exports."""
    aggregate = await aggregate_reports(db, date_range_filter(start_date, end_date))
    return ReportsExportResponse(
        success=aggregate.groups,
        total_reports_count=aggregate.total_count,
        count_by_invoice_numbers=aggregate.invoice_counts,
    )


def _to_page_response(aggregate: ReportAggregate) -> ReportsPageResponse:
    return ReportsPageResponse(
        success=aggregate.groups,
        total_reports_count=aggregate.total_count,
        total_pages=aggregate.total_pages,
        current_page=aggregate.page,
        count_by_invoice_numbers=aggregate.invoice_counts,
    )
