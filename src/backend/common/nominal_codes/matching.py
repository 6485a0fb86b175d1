from __future__ import annotations

from typing import List

from .models import ALL_ENTITIES, ClassifiableLineItem, NominalCodeRule


def split_keywords(raw: str | None) -> List[str]:
    """Split a comma-separated keyword field into lowercased, trimmed, non-empty tokens."""
    if not raw:
        return []
    return [token.strip() for token in raw.lower().split(",") if token.strip()]


def is_well_formed(rule: NominalCodeRule) -> bool:
    # Rules are edited through forms and may be saved half-filled.
    return rule.item_type is not None and bool((rule.nominal_code_id or "").strip())


def rule_in_scope(rule: NominalCodeRule, item: ClassifiableLineItem) -> bool:
    if rule.item_type != item.item_type:
        return False
    return rule.entity_id == ALL_ENTITIES or rule.entity_id == item.entity_id


def rule_matches_description(rule: NominalCodeRule, description: str | None) -> bool:
    text = (description or "").lower()

    # Exclusions win over any keyword hit, wildcard included.
    if any(token in text for token in split_keywords(rule.exclude_keywords)):
        return False

    keywords = split_keywords(rule.keywords)
    if not keywords:
        return True
    return any(token in text for token in keywords)


def rule_applies(rule: NominalCodeRule, item: ClassifiableLineItem) -> bool:
    return (
        is_well_formed(rule)
        and rule_in_scope(rule, item)
        and rule_matches_description(rule, item.description)
    )
