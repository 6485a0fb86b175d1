from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable

from common.documents.models import (
    Customer,
    EstimateLineItem,
    Invoice,
    Purchase,
    TaxRate,
    Vehicle,
)

from .fields import DocumentAdapterError, optional_str, parse_date, parse_decimal, require_id

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def tax_rates_from_documents(docs: Iterable[Any]) -> list[TaxRate]:
    rates: list[TaxRate] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        rate_id = require_id(doc, "taxRates")
        rate = parse_decimal(doc.get("rate"))
        if rate is None:
            raise DocumentAdapterError(f"Tax rate {rate_id} has no usable rate.")
        rates.append(
            TaxRate(
                id=rate_id,
                code=str(doc.get("code") or "").strip(),
                name=str(doc.get("name") or "").strip(),
                rate=rate,
            )
        )
    return rates


def line_item_from_document(doc: dict[str, Any]) -> EstimateLineItem:
    return EstimateLineItem(
        id=require_id(doc, "lineItems"),
        description=str(doc.get("description") or ""),
        quantity=parse_decimal(doc.get("quantity")) or _ZERO,
        unit_price=parse_decimal(doc.get("unitPrice")) or _ZERO,
        unit_cost=parse_decimal(doc.get("unitCost")) or _ZERO,
        is_labor=bool(doc.get("isLabor")),
        tax_code_id=optional_str(doc.get("taxCodeId")),
        part_id=optional_str(doc.get("partId")),
        part_number=optional_str(doc.get("partNumber")),
        service_package_id=optional_str(doc.get("servicePackageId")),
        service_package_name=optional_str(doc.get("servicePackageName")),
        is_package_component=bool(doc.get("isPackageComponent")),
        is_optional=bool(doc.get("isOptional")),
        from_stock=bool(doc.get("fromStock")),
        is_courtesy_car=bool(doc.get("isCourtesyCar")),
        is_storage_charge=bool(doc.get("isStorageCharge")),
    )


def invoices_from_documents(docs: Iterable[Any]) -> list[Invoice]:
    invoices: list[Invoice] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        invoice_id = require_id(doc, "invoices")
        issue_date = parse_date(doc.get("issueDate"))
        if issue_date is None:
            logger.warning("Invoice %s has no valid issueDate; skipping it.", invoice_id)
            continue
        lines = [
            line_item_from_document(raw)
            for raw in (doc.get("lineItems") or [])
            if isinstance(raw, dict)
        ]
        invoices.append(
            Invoice(
                id=invoice_id,
                entity_id=str(doc.get("entityId") or "").strip(),
                customer_id=str(doc.get("customerId") or "").strip(),
                vehicle_id=optional_str(doc.get("vehicleId")),
                job_id=optional_str(doc.get("jobId")),
                issue_date=issue_date,
                due_date=parse_date(doc.get("dueDate")),
                status=str(doc.get("status") or "Draft"),
                line_items=lines,
                notes=optional_str(doc.get("notes")),
            )
        )
    return invoices


def purchases_from_documents(docs: Iterable[Any]) -> list[Purchase]:
    purchases: list[Purchase] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        purchase_id = require_id(doc, "purchases")
        purchase_date = parse_date(doc.get("purchaseDate"))
        if purchase_date is None:
            logger.warning("Purchase %s has no valid purchaseDate; skipping it.", purchase_id)
            continue
        price = parse_decimal(doc.get("purchasePrice"))
        if price is None:
            logger.warning("Purchase %s has no purchasePrice; treating it as 0.", purchase_id)
            price = _ZERO
        purchases.append(
            Purchase(
                id=purchase_id,
                entity_id=str(doc.get("entityId") or "").strip(),
                name=str(doc.get("name") or ""),
                purchase_price=price,
                markup_percent=parse_decimal(doc.get("markupPercent")),
                job_id=optional_str(doc.get("jobId")),
                invoice_id=optional_str(doc.get("invoiceId")),
                supplier_id=optional_str(doc.get("supplierId")),
                supplier_reference=optional_str(doc.get("supplierReference")),
                purchase_date=purchase_date,
                tax_code_id=optional_str(doc.get("taxCodeId")),
            )
        )
    return purchases


def customers_from_documents(docs: Iterable[Any]) -> list[Customer]:
    return [
        Customer(
            id=require_id(doc, "customers"),
            forename=str(doc.get("forename") or ""),
            surname=str(doc.get("surname") or ""),
            company_name=optional_str(doc.get("companyName")),
        )
        for doc in docs
        if isinstance(doc, dict)
    ]


def vehicles_from_documents(docs: Iterable[Any]) -> list[Vehicle]:
    return [
        Vehicle(
            id=require_id(doc, "vehicles"),
            customer_id=str(doc.get("customerId") or ""),
            registration=str(doc.get("registration") or ""),
            make=str(doc.get("make") or ""),
            model=str(doc.get("model") or ""),
        )
        for doc in docs
        if isinstance(doc, dict)
    ]
