import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.nominal_codes.models import ClassifiableLineItem, NominalCode, NominalCodeRule


@pytest.fixture
def nominal_codes() -> list[NominalCode]:
    return [
        NominalCode(id="nc1", code="4000", name="Sales - Parts"),
        NominalCode(id="nc2", code="4010", name="Sales - General", secondary_code="S-GEN"),
        NominalCode(id="nc3", code="4100", name="Sales - Labour"),
        NominalCode(id="nc4", code="5000", name="Purchases"),
    ]


@pytest.fixture
def make_rule():
    counter = {"n": 0}

    def _make(
        *,
        priority: int = 10,
        item_type="Part",
        keywords: str = "",
        exclude_keywords: str = "",
        entity_id: str = "all",
        nominal_code_id: str = "nc1",
        rule_id: str | None = None,
    ) -> NominalCodeRule:
        counter["n"] += 1
        return NominalCodeRule(
            id=rule_id or f"ncr_{counter['n']}",
            priority=priority,
            entity_id=entity_id,
            item_type=item_type,
            keywords=keywords,
            exclude_keywords=exclude_keywords,
            nominal_code_id=nominal_code_id,
        )

    return _make


@pytest.fixture
def make_item():
    def _make(description: str, *, item_type="Part", entity_id: str = "e1") -> ClassifiableLineItem:
        return ClassifiableLineItem(description=description, item_type=item_type, entity_id=entity_id)

    return _make
