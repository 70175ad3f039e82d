"""Invoice report listings

Read-only endpoints summarising invoice line items by invoice number,
filtered by date, date range, invoice number or product name. Handlers
delegate to service functions that share a single aggregation query."""
