from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ALL_ENTITIES = "all"


class NominalCodeItemType(str, Enum):
    LABOR = "Labor"
    PART = "Part"
    MOT = "MOT"
    PURCHASE = "Purchase"
    COURTESY_CAR = "CourtesyCar"
    STORAGE = "Storage"


class NominalCode(BaseModel):
    id: str
    code: str
    name: str
    # Mapping for external accounting packages that use their own ledger numbering.
    secondary_code: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.code} - {self.name}"


class NominalCodeRule(BaseModel):
    id: str
    priority: int = 0
    entity_id: str = ALL_ENTITIES
    # None when the stored rule is incomplete; such rules never match.
    item_type: Optional[NominalCodeItemType] = None
    keywords: str = ""
    exclude_keywords: str = ""
    nominal_code_id: str = ""

    @field_validator("item_type", mode="before")
    @classmethod
    def _blank_or_unknown_item_type(cls, value: Any) -> Any:
        if value is None or isinstance(value, NominalCodeItemType):
            return value
        text = str(value).strip()
        if not text:
            return None
        try:
            return NominalCodeItemType(text)
        except ValueError:
            logger.warning("Nominal code rule has unknown item type %r; it will never match.", text)
            return None


class ClassifiableLineItem(BaseModel):
    """Shape shared by invoice lines, purchase-order lines and purchases for matching."""

    description: str = ""
    item_type: NominalCodeItemType
    entity_id: str


class RuleSetEntry(BaseModel):
    rule_id: str
    priority: int
    entity_id: str
    item_type: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    exclude_keywords: List[str] = Field(default_factory=list)
    wildcard: bool = False
    nominal_code_id: str = ""
    nominal_code: Optional[str] = None
    problems: List[str] = Field(default_factory=list)
