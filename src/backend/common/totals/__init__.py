from .calculator import compute_document_totals, line_vat, quantize_amount
from .models import DocumentTotals, VatBreakdownEntry

__all__ = [
    "DocumentTotals",
    "VatBreakdownEntry",
    "compute_document_totals",
    "line_vat",
    "quantize_amount",
]
