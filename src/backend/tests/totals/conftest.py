import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from decimal import Decimal

import pytest

from common.documents.models import EstimateLineItem, TaxRate


@pytest.fixture
def tax_rates() -> list[TaxRate]:
    return [
        TaxRate(id="tax_1", code="T0", name="VAT Exempt", rate=Decimal("0")),
        TaxRate(id="tax_2", code="T1", name="Standard VAT", rate=Decimal("20")),
        TaxRate(id="tax_3", code="T5", name="Reduced VAT", rate=Decimal("5")),
    ]


@pytest.fixture
def make_line():
    counter = {"n": 0}

    def _make(qty, price, cost="0", *, tax_code_id="tax_2", **extra) -> EstimateLineItem:
        counter["n"] += 1
        return EstimateLineItem(
            id=f"line_{counter['n']}",
            description=extra.pop("description", f"Line {counter['n']}"),
            quantity=Decimal(str(qty)),
            unit_price=Decimal(str(price)),
            unit_cost=Decimal(str(cost)),
            tax_code_id=tax_code_id,
            **extra,
        )

    return _make
