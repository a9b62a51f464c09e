"""
Field-priority readers for billing backend payloads.

The backend answers bill queries in more than one shape. These helpers are
the single place that decides which field wins:

amount:   billTotal > amount > bills[0].amount > 0
paid:     bills[0].isPaid | bills[0].IsPaid > isPaid > False
period:   bills[0].month > requested period
list:     bills > items
count:    totalCount > len(list)

A field counts as present only when it holds a finite number (amounts,
counts) or a non-null value (flags, periods).
"""

from __future__ import annotations

import math
from typing import Any, Optional

TOTAL_FIELD = "billTotal"
AMOUNT_FIELD = "amount"
ITEMS_FIELD = "bills"
GENERIC_ITEMS_FIELD = "items"
PAID_FIELDS = ("isPaid", "IsPaid")
PERIOD_FIELD = "month"
TOTAL_COUNT_FIELD = "totalCount"
REMAINING_FIELD = "remainingAmount"
TRANSACTION_STATUS_FIELD = "transactionStatus"


def as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def first_bill(data: dict[str, Any]) -> Optional[dict[str, Any]]:
    bills = data.get(ITEMS_FIELD)
    if isinstance(bills, list) and bills and isinstance(bills[0], dict):
        return bills[0]
    return None


def paid_flag(entry: dict[str, Any]) -> Optional[bool]:
    for field in PAID_FIELDS:
        if entry.get(field) is not None:
            return bool(entry[field])
    return None


def bill_amount(data: dict[str, Any]) -> float:
    for value in (data.get(TOTAL_FIELD), data.get(AMOUNT_FIELD)):
        number = as_number(value)
        if number is not None:
            return number
    entry = first_bill(data)
    if entry is not None:
        number = as_number(entry.get(AMOUNT_FIELD))
        if number is not None:
            return number
    return 0.0


def bill_is_paid(data: dict[str, Any]) -> bool:
    entry = first_bill(data)
    if entry is not None:
        flag = paid_flag(entry)
        if flag is not None:
            return flag
    flag = paid_flag(data)
    return flag if flag is not None else False


def bill_period(data: dict[str, Any], requested: str) -> str:
    entry = first_bill(data)
    if entry is not None and entry.get(PERIOD_FIELD):
        return str(entry[PERIOD_FIELD])
    return requested


def detailed_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    for field in (ITEMS_FIELD, GENERIC_ITEMS_FIELD):
        items = data.get(field)
        if isinstance(items, list):
            return [item for item in items if isinstance(item, dict)]
    return []


def detailed_total_count(data: dict[str, Any], returned: int) -> int:
    count = as_number(data.get(TOTAL_COUNT_FIELD))
    if count is not None and count > 0:
        return int(count)
    return returned


def remaining_amount(data: dict[str, Any]) -> Optional[float]:
    return as_number(data.get(REMAINING_FIELD))


def transaction_status(data: dict[str, Any]) -> Optional[str]:
    status = data.get(TRANSACTION_STATUS_FIELD)
    if status is None or status == "":
        return None
    return str(status)
