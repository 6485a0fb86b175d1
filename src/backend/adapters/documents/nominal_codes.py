from __future__ import annotations

import logging
from typing import Any, Iterable

from common.nominal_codes.models import ALL_ENTITIES, NominalCode, NominalCodeItemType, NominalCodeRule

from .fields import DocumentAdapterError, optional_str, parse_int, require_id

logger = logging.getLogger(__name__)


def nominal_codes_from_documents(docs: Iterable[Any]) -> list[NominalCode]:
    codes: list[NominalCode] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        code_id = require_id(doc, "nominalCodes")
        code = str(doc.get("code") or "").strip()
        name = str(doc.get("name") or "").strip()
        if not code or not name:
            raise DocumentAdapterError(f"Nominal code {code_id} requires both code and name.")
        codes.append(
            NominalCode(
                id=code_id,
                code=code,
                name=name,
                secondary_code=optional_str(doc.get("secondaryCode")),
            )
        )
    return codes


def _item_type(value: Any, rule_id: str) -> NominalCodeItemType | None:
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return NominalCodeItemType(text)
    except ValueError:
        logger.warning("Rule %s has unknown item type %r; it will never match.", rule_id, text)
        return None


def nominal_code_rules_from_documents(docs: Iterable[Any]) -> list[NominalCodeRule]:
    """Convert stored rule documents, keeping incomplete rules so callers can report them."""
    rules: list[NominalCodeRule] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        rule_id = require_id(doc, "nominalCodeRules")
        rules.append(
            NominalCodeRule(
                id=rule_id,
                priority=parse_int(doc.get("priority")),
                entity_id=str(doc.get("entityId") or ALL_ENTITIES).strip() or ALL_ENTITIES,
                item_type=_item_type(doc.get("itemType"), rule_id),
                keywords=str(doc.get("keywords") or ""),
                exclude_keywords=str(doc.get("excludeKeywords") or ""),
                nominal_code_id=str(doc.get("nominalCodeId") or "").strip(),
            )
        )
    return rules
