"""Accounts export: nominal-coded rows for invoices and purchases, rendered as CSV."""

from .nominal_export import (
    EXPORT_HEADERS,
    ExportRow,
    ExportSummary,
    build_invoice_export_rows,
    build_purchase_export_rows,
    filter_rows_by_date,
    override_assignment,
    render_export_csv,
    summarize_export,
)

__all__ = [
    "EXPORT_HEADERS",
    "ExportRow",
    "ExportSummary",
    "build_invoice_export_rows",
    "build_purchase_export_rows",
    "filter_rows_by_date",
    "override_assignment",
    "render_export_csv",
    "summarize_export",
]
