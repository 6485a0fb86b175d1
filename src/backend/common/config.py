from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()

STANDARD_TAX_CODE = "T1"
UNASSIGNED_LABEL = "Unassigned"


class ExportConfig(BaseModel):
    """Per-run settings for totals and nominal code exports."""

    # Tax rate code applied to lines saved without a tax code.
    standard_tax_code: str = STANDARD_TAX_CODE
    unassigned_label: str = UNASSIGNED_LABEL
    # Quantization for money outputs. If unset, amounts are left exact.
    amount_quantize: Optional[Decimal] = Decimal("0.01")


@dataclass(frozen=True)
class WorkshopSettings:
    data_dir: Optional[Path]
    output_dir: Optional[Path]
    standard_tax_code: str

    def export_config(self) -> ExportConfig:
        return ExportConfig(standard_tax_code=self.standard_tax_code)


def get_workshop_settings() -> WorkshopSettings:
    """
    Load workshop settings from environment variables (and a local .env file).

    Reads WORKSHOP_DATA_DIR, WORKSHOP_OUTPUT_DIR, WORKSHOP_STANDARD_TAX_CODE.
    """
    tax_code = os.getenv("WORKSHOP_STANDARD_TAX_CODE", STANDARD_TAX_CODE).strip()
    if not tax_code:
        raise ValueError("WORKSHOP_STANDARD_TAX_CODE must not be blank.")
    return WorkshopSettings(
        data_dir=_optional_path("WORKSHOP_DATA_DIR"),
        output_dir=_optional_path("WORKSHOP_OUTPUT_DIR"),
        standard_tax_code=tax_code,
    )


def _optional_path(name: str) -> Optional[Path]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return Path(value).expanduser()
