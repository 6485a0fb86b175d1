from __future__ import annotations

import csv
import io
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel

from common.documents.models import Customer, Invoice, Purchase, TaxRate, Vehicle
from common.nominal_codes import (
    NominalCode,
    NominalCodeResolver,
    NominalCodeRule,
    classifiable_from_purchase,
    classifiable_from_sales_line,
)
from common.totals import line_vat, quantize_amount

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "ID",
    "Date",
    "Customer",
    "Vehicle Registration",
    "Description",
    "Net",
    "VAT",
    "Gross",
    "Nominal Code",
    "Nominal Name",
]

_PENNY = Decimal("0.01")


class ExportRow(BaseModel):
    row_id: str
    source_id: str
    source_date: date
    customer_name: str
    vehicle_registration: str = ""
    description: str = ""
    net: Decimal
    vat: Decimal
    gross: Decimal
    entity_id: str
    assigned_code_id: Optional[str] = None
    # Rule that produced the assignment; None when unassigned or overridden by hand.
    rule_id: Optional[str] = None


class ExportSummary(BaseModel):
    total_rows: int
    assigned_rows: int
    unassigned_rows: int
    unassigned_row_ids: List[str]


def _assign(resolver: NominalCodeResolver, item) -> tuple[Optional[str], Optional[str]]:
    rule = resolver.select(item)
    if rule is None:
        return None, None
    # A rule aimed at a deleted code leaves the line unassigned.
    if resolver.get_code(rule.nominal_code_id) is None:
        return None, rule.id
    return rule.nominal_code_id, rule.id


def build_invoice_export_rows(
    invoices: Iterable[Invoice],
    *,
    rules: Sequence[NominalCodeRule],
    nominal_codes: Sequence[NominalCode],
    tax_rates: Sequence[TaxRate],
    customers: Sequence[Customer] = (),
    vehicles: Sequence[Vehicle] = (),
) -> List[ExportRow]:
    resolver = NominalCodeResolver(rules, nominal_codes)
    rates_by_id = {rate.id: rate for rate in tax_rates}
    customer_names = {c.id: c.display_name for c in customers}
    registrations = {v.id: v.registration for v in vehicles}

    rows: List[ExportRow] = []
    for invoice in invoices:
        registration = registrations.get(invoice.vehicle_id, "") if invoice.vehicle_id else ""
        for line in invoice.line_items:
            code_id, rule_id = _assign(resolver, classifiable_from_sales_line(line, invoice.entity_id))
            net = line.quantity * line.unit_price
            vat = line_vat(net, rates_by_id.get(line.tax_code_id or ""))
            rows.append(
                ExportRow(
                    row_id=f"{invoice.id}-{line.id}",
                    source_id=invoice.id,
                    source_date=invoice.issue_date,
                    customer_name=customer_names.get(invoice.customer_id, "Unknown"),
                    vehicle_registration=registration,
                    description=line.description,
                    net=net,
                    vat=vat,
                    gross=net + vat,
                    entity_id=invoice.entity_id,
                    assigned_code_id=code_id,
                    rule_id=rule_id,
                )
            )
    return rows


def build_purchase_export_rows(
    purchases: Iterable[Purchase],
    *,
    rules: Sequence[NominalCodeRule],
    nominal_codes: Sequence[NominalCode],
    tax_rates: Sequence[TaxRate],
) -> List[ExportRow]:
    resolver = NominalCodeResolver(rules, nominal_codes)
    rates_by_id = {rate.id: rate for rate in tax_rates}

    rows: List[ExportRow] = []
    for purchase in purchases:
        code_id, rule_id = _assign(resolver, classifiable_from_purchase(purchase))
        net = purchase.purchase_price
        vat = line_vat(net, rates_by_id.get(purchase.tax_code_id or ""))
        rows.append(
            ExportRow(
                row_id=purchase.id,
                source_id=purchase.id,
                source_date=purchase.purchase_date,
                customer_name="N/A",
                description=purchase.name,
                net=net,
                vat=vat,
                gross=net + vat,
                entity_id=purchase.entity_id,
                assigned_code_id=code_id,
                rule_id=rule_id,
            )
        )
    return rows


def filter_rows_by_date(rows: Iterable[ExportRow], start: date, end: date) -> List[ExportRow]:
    """Keep rows dated within [start, end], both ends inclusive."""
    return [row for row in rows if start <= row.source_date <= end]


def override_assignment(
    rows: Sequence[ExportRow],
    row_id: str,
    nominal_code_id: Optional[str],
) -> List[ExportRow]:
    """Return a copy of `rows` with one row's nominal code replaced (None clears it)."""
    out: List[ExportRow] = []
    for row in rows:
        if row.row_id == row_id:
            row = row.model_copy(update={"assigned_code_id": nominal_code_id or None, "rule_id": None})
        out.append(row)
    return out


def summarize_export(rows: Sequence[ExportRow]) -> ExportSummary:
    unassigned = [row.row_id for row in rows if not row.assigned_code_id]
    if unassigned:
        logger.warning("%d of %d export rows have no nominal code.", len(unassigned), len(rows))
    return ExportSummary(
        total_rows=len(rows),
        assigned_rows=len(rows) - len(unassigned),
        unassigned_rows=len(unassigned),
        unassigned_row_ids=unassigned,
    )


def _money(value: Decimal, quantize: Optional[Decimal]) -> str:
    return format(quantize_amount(value, quantize), "f")


def render_export_csv(
    rows: Iterable[ExportRow],
    nominal_codes: Sequence[NominalCode],
    *,
    quantize: Optional[Decimal] = _PENNY,
) -> str:
    """Render rows as ledger CSV; money columns are rounded half-up to `quantize` (None keeps them exact)."""
    codes_by_id = {code.id: code for code in nominal_codes}
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for row in rows:
        code = codes_by_id.get(row.assigned_code_id) if row.assigned_code_id else None
        writer.writerow(
            [
                row.source_id,
                row.source_date.isoformat(),
                row.customer_name.replace(",", ""),
                row.vehicle_registration,
                row.description.replace(",", ""),
                _money(row.net, quantize),
                _money(row.vat, quantize),
                _money(row.gross, quantize),
                code.code if code else "",
                code.name if code else "",
            ]
        )
    return buffer.getvalue()
