from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class TaxRate(BaseModel):
    id: str
    code: str
    name: str
    # Percentage, e.g. Decimal("20") for standard VAT.
    rate: Decimal


class EstimateLineItem(BaseModel):
    """A billable line on an estimate or invoice."""

    id: str
    description: str = ""
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")
    unit_cost: Decimal = Decimal("0")
    is_labor: bool = False
    tax_code_id: Optional[str] = None
    part_id: Optional[str] = None
    part_number: Optional[str] = None
    service_package_id: Optional[str] = None
    service_package_name: Optional[str] = None
    is_package_component: bool = False
    is_optional: bool = False
    from_stock: bool = False
    is_courtesy_car: bool = False
    is_storage_charge: bool = False

    @property
    def is_package_header(self) -> bool:
        return bool(self.service_package_id) and not self.is_package_component


class Invoice(BaseModel):
    id: str
    entity_id: str
    customer_id: str = ""
    vehicle_id: Optional[str] = None
    job_id: Optional[str] = None
    issue_date: date
    due_date: Optional[date] = None
    status: str = "Draft"
    line_items: List[EstimateLineItem] = Field(default_factory=list)
    notes: Optional[str] = None


class PurchaseOrderLineItem(BaseModel):
    id: str
    part_id: Optional[str] = None
    part_number: str = ""
    description: str = ""
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")
    received_quantity: Decimal = Decimal("0")


class Purchase(BaseModel):
    id: str
    entity_id: str
    name: str = ""
    purchase_price: Decimal = Decimal("0")
    markup_percent: Optional[Decimal] = None
    job_id: Optional[str] = None
    invoice_id: Optional[str] = None
    supplier_id: Optional[str] = None
    supplier_reference: Optional[str] = None
    purchase_date: date
    tax_code_id: Optional[str] = None


class Customer(BaseModel):
    id: str
    forename: str = ""
    surname: str = ""
    company_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.forename} {self.surname}"


class Vehicle(BaseModel):
    id: str
    customer_id: str = ""
    registration: str = ""
    make: str = ""
    model: str = ""
