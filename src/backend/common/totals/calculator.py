from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Optional

from common.config import STANDARD_TAX_CODE
from common.documents.models import EstimateLineItem, TaxRate

from .models import DocumentTotals, VatBreakdownEntry

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def quantize_amount(value: Decimal, quantize: Optional[Decimal]) -> Decimal:
    if quantize is None:
        return value
    return value.quantize(quantize, rounding=ROUND_HALF_UP)


def line_net(line: EstimateLineItem) -> Decimal:
    return (line.quantity or _ZERO) * (line.unit_price or _ZERO)


def line_cost(line: EstimateLineItem) -> Decimal:
    return (line.quantity or _ZERO) * (line.unit_cost or _ZERO)


def line_vat(net: Decimal, tax_rate: Optional[TaxRate]) -> Decimal:
    if tax_rate is None:
        return _ZERO
    return net * tax_rate.rate / _HUNDRED


def compute_document_totals(
    line_items: Iterable[EstimateLineItem],
    tax_rates: Iterable[TaxRate],
    *,
    standard_tax_code: str = STANDARD_TAX_CODE,
    quantize: Optional[Decimal] = None,
) -> DocumentTotals:
    """Roll up an estimate or invoice from its line items.

    Package component lines are left out so a package is counted once, through
    its header line. Lines without a tax code fall back to the standard rate;
    lines whose tax code cannot be resolved at all are skipped. VAT groups at
    0% (or with no positive net) are left out of the breakdown but their net
    still counts toward the subtotal.
    """
    rates_by_id: Dict[str, TaxRate] = {rate.id: rate for rate in tax_rates}
    standard = next((r for r in rates_by_id.values() if r.code == standard_tax_code), None)

    groups: Dict[str, VatBreakdownEntry] = {}
    net_subtotal = _ZERO
    total_cost = _ZERO

    for line in line_items:
        if line.is_package_component:
            continue
        tax_code_id = line.tax_code_id or (standard.id if standard else None)
        if not tax_code_id:
            continue
        tax_rate = rates_by_id.get(tax_code_id)
        if tax_rate is None:
            continue

        net = line_net(line)
        group = groups.get(tax_code_id)
        if group is None:
            group = VatBreakdownEntry(tax_code_id=tax_code_id, name=tax_rate.name, rate=tax_rate.rate)
            groups[tax_code_id] = group
        group.net += net
        net_subtotal += net
        total_cost += line_cost(line)

    breakdown = []
    for group in groups.values():
        group.vat = line_vat(group.net, rates_by_id[group.tax_code_id])
        if group.net > 0 and group.rate > 0:
            breakdown.append(group)

    total_vat = sum((g.vat for g in breakdown), _ZERO)
    gross_profit = net_subtotal - total_cost
    margin = (gross_profit / net_subtotal * _HUNDRED) if net_subtotal > 0 else _ZERO

    return DocumentTotals(
        net_subtotal=quantize_amount(net_subtotal, quantize),
        vat_breakdown=[
            VatBreakdownEntry(
                tax_code_id=g.tax_code_id,
                name=g.name,
                rate=g.rate,
                net=quantize_amount(g.net, quantize),
                vat=quantize_amount(g.vat, quantize),
            )
            for g in breakdown
        ],
        total_vat=quantize_amount(total_vat, quantize),
        grand_total=quantize_amount(net_subtotal + total_vat, quantize),
        total_cost=quantize_amount(total_cost, quantize),
        gross_profit=quantize_amount(gross_profit, quantize),
        profit_margin=quantize_amount(margin, quantize),
    )
