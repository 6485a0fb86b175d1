from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from adapters.documents import (
    customers_from_documents,
    invoices_from_documents,
    nominal_code_rules_from_documents,
    nominal_codes_from_documents,
    purchases_from_documents,
    tax_rates_from_documents,
    vehicles_from_documents,
)
from common.documents.models import Customer, Invoice, Purchase, TaxRate, Vehicle
from common.nominal_codes import NominalCode, NominalCodeRule

logger = logging.getLogger(__name__)

# One JSON array per document collection, named after the collection.
COLLECTION_FILES = {
    "nominal_codes": "nominalCodes.json",
    "nominal_code_rules": "nominalCodeRules.json",
    "tax_rates": "taxRates.json",
    "invoices": "invoices.json",
    "purchases": "purchases.json",
    "customers": "customers.json",
    "vehicles": "vehicles.json",
}


@dataclass(frozen=True)
class ExportInputs:
    nominal_codes: tuple[NominalCode, ...] = ()
    nominal_code_rules: tuple[NominalCodeRule, ...] = ()
    tax_rates: tuple[TaxRate, ...] = ()
    invoices: tuple[Invoice, ...] = ()
    purchases: tuple[Purchase, ...] = ()
    customers: tuple[Customer, ...] = ()
    vehicles: tuple[Vehicle, ...] = ()


class DataSource(Protocol):
    def build_export_inputs(self) -> ExportInputs:
        """Return typed collections for a nominal code export."""
        ...


def get_data_source(name: str, *, data_dir: Path | None = None) -> DataSource:
    """Resolve a data source implementation by name (fixtures)."""
    source = (name or "").strip().lower()
    if source in ("fixtures", ""):
        if data_dir is None:
            raise ValueError("The fixtures data source requires a data directory.")
        return FixturesDataSource(data_dir)
    raise ValueError(f"Unknown data source '{name}' (expected 'fixtures').")


class FixturesDataSource:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)

    def _load(self, key: str) -> list[Any]:
        path = self._data_dir / COLLECTION_FILES[key]
        if not path.exists():
            logger.info("No %s found in %s; treating collection as empty.", path.name, self._data_dir)
            return []
        with path.open(encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, list):
            raise ValueError(f"{path} must contain a JSON array of documents.")
        return raw

    def build_export_inputs(self) -> ExportInputs:
        return ExportInputs(
            nominal_codes=tuple(nominal_codes_from_documents(self._load("nominal_codes"))),
            nominal_code_rules=tuple(nominal_code_rules_from_documents(self._load("nominal_code_rules"))),
            tax_rates=tuple(tax_rates_from_documents(self._load("tax_rates"))),
            invoices=tuple(invoices_from_documents(self._load("invoices"))),
            purchases=tuple(purchases_from_documents(self._load("purchases"))),
            customers=tuple(customers_from_documents(self._load("customers"))),
            vehicles=tuple(vehicles_from_documents(self._load("vehicles"))),
        )
