"""Report API Schemas

Pydantic models for the reports endpoints. Field names are snake_case in
Python and serialised with the camelCase names clients of the reports API
already consume (``invoiceNumber``, ``paymentMethod``, ``totalPages``...).
Prisma-style count objects keep their leading underscore (``_count``,
``_all``) through explicit aliases.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ReportRow(CamelModel):
    id: int
    invoice_number: int
    payment_method: str
    gst: float
    spl: float
    name: str
    date: str


class CountAll(BaseModel):
    total: int = Field(..., alias="_all")

    model_config = ConfigDict(populate_by_name=True)


class InvoiceCount(CamelModel):
    """One row of the group-by-invoice count list."""
    invoice_number: int
    count: CountAll = Field(..., alias="_count")


class InvoiceGroup(CamelModel):
    """An invoice with its matching row count and a representative row."""
    invoice_number: int
    count: int = Field(..., alias="_count")
    first_product: Optional[ReportRow] = None


class ReportsPageResponse(CamelModel):
    success: List[InvoiceGroup]
    total_reports_count: int
    total_pages: int
    current_page: int
    count_by_invoice_numbers: List[InvoiceCount]


class InvoiceReportsResponse(CamelModel):
    success: List[ReportRow]
    total_reports_count: int
    total_pages: int
    current_page: int


class ReportsByNameResponse(CamelModel):
    success: List[InvoiceGroup]
    total_products: int
    total_pages: int
    current_page: int
    count_by_invoice: List[InvoiceCount]


class ReportsExportResponse(CamelModel):
    success: List[InvoiceGroup]
    total_reports_count: int
    count_by_invoice_numbers: List[InvoiceCount]
