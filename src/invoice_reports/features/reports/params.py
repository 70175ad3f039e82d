"""Query parameter dependencies for the reports endpoints.

Paging parameters are lenient: anything that is not a positive integer
falls back to the default instead of failing the request. Filter
parameters are strict and raise ``InvalidParameterError`` (400).
"""
import datetime
import re
from dataclasses import dataclass
from typing import Optional

from fastapi import Query

from ...core import config
from ...core.errors import InvalidParameterError
from .service import Pagination, parse_report_date

DATE_RANGE_REQUIRED_MESSAGE = "startDate and endDate parameters are required."
INVALID_INVOICE_MESSAGE = "Invalid invoiceNumber. Please provide a valid invoiceNumber."
NAME_REQUIRED_MESSAGE = "name parameter is required."

INVOICE_NUMBER_PATTERN = re.compile(r"-?[0-9]+")
INVOICE_NUMBER_MIN = -(2 ** 31)
INVOICE_NUMBER_MAX = 2 ** 31 - 1


def coerce_positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _pagination(page: Optional[str], max_result: Optional[str]) -> Pagination:
    return Pagination(
        page=coerce_positive_int(page, 1),
        max_result=coerce_positive_int(max_result, config.DEFAULT_PAGE_SIZE),
    )


def pagination_params(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    max_result: Optional[str] = Query(None, alias="maxResult", description="Page size, defaults to 10"),
) -> Pagination:
    return _pagination(page, max_result)


def name_pagination_params(
    current_page: Optional[str] = Query(None, alias="currentPage", description="Page number, defaults to 1"),
    max_result: Optional[str] = Query(None, alias="maxResult", description="Page size, defaults to 10"),
) -> Pagination:
    return _pagination(current_page, max_result)


@dataclass
class DateRange:
    start_date: datetime.date
    end_date: datetime.date


def date_range_params(
    start_date: Optional[str] = Query(None, alias="startDate", description="First day, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Last day, inclusive"),
) -> DateRange:
    if not start_date or not end_date:
        raise InvalidParameterError(DATE_RANGE_REQUIRED_MESSAGE)
    return DateRange(start_date=parse_report_date(start_date), end_date=parse_report_date(end_date))


def invoice_number_param(
    invoice_number: Optional[str] = Query(None, alias="invoiceNumber", description="Invoice to list"),
) -> int:
    text = (invoice_number or "").strip()
    if not INVOICE_NUMBER_PATTERN.fullmatch(text):
        raise InvalidParameterError(INVALID_INVOICE_MESSAGE)
    value = int(text)
    # Bounds of the invoice_number column (IntField)
    if not INVOICE_NUMBER_MIN <= value <= INVOICE_NUMBER_MAX:
        raise InvalidParameterError(INVALID_INVOICE_MESSAGE)
    return value


def name_param(
    name: Optional[str] = Query(None, description="Substring of the product name"),
) -> str:
    if not name or not name.strip():
        raise InvalidParameterError(NAME_REQUIRED_MESSAGE)
    return name
