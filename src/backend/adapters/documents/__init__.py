"""Converters from stored camelCase collection documents to typed records."""

from .fields import DocumentAdapterError
from .ledger import (
    customers_from_documents,
    invoices_from_documents,
    purchases_from_documents,
    tax_rates_from_documents,
    vehicles_from_documents,
)
from .nominal_codes import nominal_code_rules_from_documents, nominal_codes_from_documents

__all__ = [
    "DocumentAdapterError",
    "customers_from_documents",
    "invoices_from_documents",
    "nominal_code_rules_from_documents",
    "nominal_codes_from_documents",
    "purchases_from_documents",
    "tax_rates_from_documents",
    "vehicles_from_documents",
]
