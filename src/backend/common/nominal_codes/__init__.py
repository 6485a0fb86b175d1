"""Nominal code assignment for ledger exports.

Pure domain logic: rules, nominal codes and line items come in as arguments;
nothing here reads the document store or writes files.
"""

from .item_types import (
    classifiable_from_purchase,
    classifiable_from_purchase_order_line,
    classifiable_from_sales_line,
)
from .models import (
    ALL_ENTITIES,
    ClassifiableLineItem,
    NominalCode,
    NominalCodeItemType,
    NominalCodeRule,
)
from .resolver import NominalCodeResolver, resolve_nominal_code, select_rule
