from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from common.config import get_workshop_settings
from common.documents.models import EstimateLineItem, TaxRate
from common.nominal_codes import (
    ClassifiableLineItem,
    NominalCode,
    NominalCodeRule,
    NominalCodeResolver,
)
from common.totals import DocumentTotals, compute_document_totals


router = APIRouter(prefix="/nominal-codes", tags=["nominal-codes"])


class ResolveRequest(BaseModel):
    item: ClassifiableLineItem
    rules: List[NominalCodeRule] = Field(default_factory=list)
    nominal_codes: List[NominalCode] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    nominal_code: Optional[NominalCode] = None
    rule_id: Optional[str] = None
    label: str


class TotalsRequest(BaseModel):
    line_items: List[EstimateLineItem] = Field(default_factory=list)
    tax_rates: List[TaxRate] = Field(default_factory=list)
    standard_tax_code: Optional[str] = None


@router.post("/resolve", response_model=ResolveResponse)
def resolve_line_item(payload: ResolveRequest) -> ResolveResponse:
    cfg = get_workshop_settings().export_config()
    resolver = NominalCodeResolver(payload.rules, payload.nominal_codes)
    rule = resolver.select(payload.item)
    code = resolver.get_code(rule.nominal_code_id) if rule else None
    return ResolveResponse(
        nominal_code=code,
        rule_id=rule.id if rule else None,
        label=code.label if code else cfg.unassigned_label,
    )


@router.post("/totals", response_model=DocumentTotals)
def document_totals(payload: TotalsRequest) -> DocumentTotals:
    cfg = get_workshop_settings().export_config()
    if payload.standard_tax_code:
        cfg = cfg.model_copy(update={"standard_tax_code": payload.standard_tax_code})
    return compute_document_totals(
        payload.line_items,
        payload.tax_rates,
        standard_tax_code=cfg.standard_tax_code,
        quantize=cfg.amount_quantize,
    )
