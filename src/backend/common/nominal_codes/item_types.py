from __future__ import annotations

from common.documents.models import EstimateLineItem, Purchase, PurchaseOrderLineItem

from .models import ClassifiableLineItem, NominalCodeItemType

MOT_MARKER = "mot test"


def _is_mot(description: str | None) -> bool:
    return MOT_MARKER in (description or "").lower()


def sales_line_item_type(line: EstimateLineItem) -> NominalCodeItemType:
    if _is_mot(line.description):
        return NominalCodeItemType.MOT
    if line.is_courtesy_car:
        return NominalCodeItemType.COURTESY_CAR
    if line.is_storage_charge:
        return NominalCodeItemType.STORAGE
    if line.is_labor:
        return NominalCodeItemType.LABOR
    return NominalCodeItemType.PART


def purchase_order_line_item_type(line: PurchaseOrderLineItem) -> NominalCodeItemType:
    if _is_mot(line.description):
        return NominalCodeItemType.MOT
    return NominalCodeItemType.PURCHASE


def classifiable_from_sales_line(line: EstimateLineItem, entity_id: str) -> ClassifiableLineItem:
    return ClassifiableLineItem(
        description=line.description,
        item_type=sales_line_item_type(line),
        entity_id=entity_id,
    )


def classifiable_from_purchase_order_line(
    line: PurchaseOrderLineItem, entity_id: str
) -> ClassifiableLineItem:
    return ClassifiableLineItem(
        description=line.description,
        item_type=purchase_order_line_item_type(line),
        entity_id=entity_id,
    )


def classifiable_from_purchase(purchase: Purchase) -> ClassifiableLineItem:
    # Standalone purchases are always costs, whatever their name says.
    return ClassifiableLineItem(
        description=purchase.name,
        item_type=NominalCodeItemType.PURCHASE,
        entity_id=purchase.entity_id,
    )
