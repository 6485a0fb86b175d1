"""Sequential document numbers, scoped per business entity.

Numbers take the form ``<ENTITY SHORT CODE><TYPE PREFIX><5-digit sequence>``,
e.g. ``ABC99100042`` for the 42nd estimate of entity ``ABC``. The next sequence
is one past the highest number already issued for the same entity and type.
"""

from __future__ import annotations

from typing import Iterable, Optional

ESTIMATE_PREFIX = "991"
JOB_PREFIX = "992"
INVOICE_PREFIX = "911"
PURCHASE_ORDER_PREFIX = "944"
PURCHASE_PREFIX = "945"
RENTAL_BOOKING_PREFIX = "BS"

SEQUENCE_WIDTH = 5


def _parse_sequence(value: str) -> Optional[int]:
    digits = ""
    for ch in value.strip():
        if not ch.isdigit():
            break
        digits += ch
    return int(digits) if digits else None


def next_sequence(existing_ids: Iterable[Optional[str]], entity_short_code: str, prefix: str) -> str:
    short_code = (entity_short_code or "").strip().upper()
    if not short_code:
        raise ValueError(f"Cannot generate a number with prefix {prefix}: entity short code is missing.")
    full_prefix = f"{short_code}{prefix}"

    highest = 0
    for value in existing_ids:
        if not isinstance(value, str) or not value.startswith(full_prefix):
            continue
        number = _parse_sequence(value[len(full_prefix):])
        if number is not None and number > highest:
            highest = number
    return str(highest + 1).zfill(SEQUENCE_WIDTH)


def _generate(existing_ids: Iterable[Optional[str]], entity_short_code: str, prefix: str) -> str:
    sequence = next_sequence(existing_ids, entity_short_code, prefix)
    return f"{entity_short_code.strip().upper()}{prefix}{sequence}"


def generate_estimate_number(existing_numbers: Iterable[Optional[str]], entity_short_code: str) -> str:
    return _generate(existing_numbers, entity_short_code, ESTIMATE_PREFIX)


def generate_job_id(existing_ids: Iterable[Optional[str]], entity_short_code: str) -> str:
    return _generate(existing_ids, entity_short_code, JOB_PREFIX)


def generate_invoice_id(existing_ids: Iterable[Optional[str]], entity_short_code: str) -> str:
    return _generate(existing_ids, entity_short_code, INVOICE_PREFIX)


def generate_purchase_order_id(existing_ids: Iterable[Optional[str]], entity_short_code: str) -> str:
    return _generate(existing_ids, entity_short_code, PURCHASE_ORDER_PREFIX)


def generate_purchase_id(existing_ids: Iterable[Optional[str]], entity_short_code: str) -> str:
    return _generate(existing_ids, entity_short_code, PURCHASE_PREFIX)


def generate_rental_booking_id(existing_ids: Iterable[Optional[str]]) -> str:
    # Rental bookings are numbered across all entities.
    highest = 0
    for value in existing_ids:
        if not isinstance(value, str):
            continue
        number = _parse_sequence(value.replace(RENTAL_BOOKING_PREFIX, "", 1))
        if number is not None and number > highest:
            highest = number
    return f"{RENTAL_BOOKING_PREFIX}{str(highest + 1).zfill(SEQUENCE_WIDTH)}"
