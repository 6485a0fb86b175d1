from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .matching import is_well_formed, rule_applies, rule_matches_description
from .models import ALL_ENTITIES, ClassifiableLineItem, NominalCode, NominalCodeItemType, NominalCodeRule


def _best(candidates: Iterable[Tuple[int, NominalCodeRule]]) -> Optional[NominalCodeRule]:
    # Highest priority wins; on a tie the rule listed first in the input wins.
    best: Optional[Tuple[int, NominalCodeRule]] = None
    for position, rule in candidates:
        if best is None or rule.priority > best[1].priority:
            best = (position, rule)
        elif rule.priority == best[1].priority and position < best[0]:
            best = (position, rule)
    return best[1] if best else None


def select_rule(
    item: ClassifiableLineItem,
    rules: Sequence[NominalCodeRule],
) -> Optional[NominalCodeRule]:
    """Return the rule that assigns `item`, or None when no rule matches."""
    return _best((pos, rule) for pos, rule in enumerate(rules) if rule_applies(rule, item))


def resolve_nominal_code(
    item: ClassifiableLineItem,
    rules: Sequence[NominalCodeRule],
    nominal_codes: Sequence[NominalCode],
) -> Optional[NominalCode]:
    """Resolve the nominal code for a single line item.

    Returns None ("Unassigned") when nothing matches or when the winning rule
    points at a nominal code that no longer exists. A dangling winner does not
    fall through to lower-priority rules.
    """
    rule = select_rule(item, rules)
    if rule is None:
        return None
    for code in nominal_codes:
        if code.id == rule.nominal_code_id:
            return code
    return None


class NominalCodeResolver:
    """Resolver over a fixed rule set, indexed by (item type, entity) for batch exports."""

    def __init__(self, rules: Iterable[NominalCodeRule], nominal_codes: Iterable[NominalCode]):
        self._buckets: Dict[Tuple[NominalCodeItemType, str], List[Tuple[int, NominalCodeRule]]] = {}
        for position, rule in enumerate(rules):
            if not is_well_formed(rule):
                continue
            key = (rule.item_type, rule.entity_id)
            self._buckets.setdefault(key, []).append((position, rule))
        self._codes: Dict[str, NominalCode] = {}
        for code in nominal_codes:
            # First definition wins if the collection holds duplicate ids.
            self._codes.setdefault(code.id, code)

    def _candidates(self, item: ClassifiableLineItem) -> Iterable[Tuple[int, NominalCodeRule]]:
        yield from self._buckets.get((item.item_type, ALL_ENTITIES), [])
        if item.entity_id != ALL_ENTITIES:
            yield from self._buckets.get((item.item_type, item.entity_id), [])

    def select(self, item: ClassifiableLineItem) -> Optional[NominalCodeRule]:
        return _best(
            (pos, rule)
            for pos, rule in self._candidates(item)
            if rule_matches_description(rule, item.description)
        )

    def resolve(self, item: ClassifiableLineItem) -> Optional[NominalCode]:
        rule = self.select(item)
        if rule is None:
            return None
        return self._codes.get(rule.nominal_code_id)

    def resolve_many(self, items: Iterable[ClassifiableLineItem]) -> List[Optional[NominalCode]]:
        return [self.resolve(item) for item in items]

    def get_code(self, nominal_code_id: Optional[str]) -> Optional[NominalCode]:
        if not nominal_code_id:
            return None
        return self._codes.get(nominal_code_id)
