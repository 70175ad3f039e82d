"""Reporting API endpoints for invoice-reports

Read-only listings over invoice line items: today's invoices, a date
range, a single invoice, a product-name search and an unpaginated range
export used to build PDFs on the client. Handlers only collect the query
parameters and the connection handle; the queries live in ``service``.
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from tortoise import BaseDBAsyncClient

from ...core.database import get_db_client
from .params import (
    DateRange, date_range_params, invoice_number_param, name_pagination_params,
    name_param, pagination_params
)
from .schemas import (
    InvoiceReportsResponse, ReportsByNameResponse, ReportsExportResponse, ReportsPageResponse
)
from .service import Pagination
from . import service as report_service

logger = logging.getLogger(__name__)

DBClient = Annotated[BaseDBAsyncClient, Depends(get_db_client)]

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={
        400: {"description": "Missing or malformed query parameter"},
        404: {"description": "No reports, or page out of range"},
        500: {"description": "Internal server error"},
    },
)


@router.get("/", response_model=ReportsPageResponse)
async def get_report(db: DBClient, pagination: Pagination = Depends(pagination_params)):
    """Invoices dated today, grouped by invoice number."""
    return await report_service.get_todays_reports(db, pagination)


@router.get("/by", response_model=ReportsPageResponse)
async def get_reports_by(
    db: DBClient,
    period: DateRange = Depends(date_range_params),
    pagination: Pagination = Depends(pagination_params),
):
    return await report_service.get_reports_between(db, period.start_date, period.end_date, pagination)


@router.get("/products", response_model=InvoiceReportsResponse)
async def get_products_reports(
    db: DBClient,
    invoice_number: int = Depends(invoice_number_param),
    pagination: Pagination = Depends(pagination_params),
):
    return await report_service.get_invoice_reports(db, invoice_number, pagination)


@router.get("/byName", response_model=ReportsByNameResponse)
async def get_by_name(
    db: DBClient,
    name: str = Depends(name_param),
    pagination: Pagination = Depends(name_pagination_params),
):
    logger.debug(f"Searching reports by name '{name}'")
    return await report_service.get_reports_by_name(db, name, pagination)


@router.get("/pdf", response_model=ReportsExportResponse)
async def get_pdf(db: DBClient, period: DateRange = Depends(date_range_params)):
    """All invoices in the range on one page; rendering is left to the client."""
    return await report_service.export_reports_between(db, period.start_date, period.end_date)
