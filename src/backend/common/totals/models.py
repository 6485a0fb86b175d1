from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class VatBreakdownEntry(BaseModel):
    tax_code_id: str
    name: str
    rate: Decimal
    net: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")


class DocumentTotals(BaseModel):
    net_subtotal: Decimal = Decimal("0")
    vat_breakdown: List[VatBreakdownEntry] = Field(default_factory=list)
    total_vat: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    gross_profit: Decimal = Decimal("0")
    # Percentage of the net subtotal, e.g. Decimal("60") for 60%.
    profit_margin: Decimal = Decimal("0")
