"""Render a DispatchOutcome as chat reply text. Pure and deterministic."""

from __future__ import annotations

from typing import Callable, Optional

from app.constants.replies import Replies
from app.schemas.billing import (
    BillStatement,
    DetailedBills,
    DispatchOutcome,
    ErrorKind,
    Failure,
    Guidance,
    NothingDue,
    PaymentReceipt,
    Success,
    SuccessKind,
)

RULE = "══════════════════════"


def format_amount(value: Optional[float]) -> str:
    """150.0 -> '150 TL', 12.5 -> '12.5 TL', None -> 'unknown'."""
    if value is None:
        return "unknown"
    if float(value).is_integer():
        return f"{int(value)} TL"
    return f"{round(float(value), 2):g} TL"


def _bill_statement(payload: BillStatement) -> str:
    status = "✅ PAID" if payload.is_paid else "❌ UNPAID"
    return (
        "💰 **BILL STATEMENT**\n"
        f"{RULE}\n"
        f"📱 Account: {payload.subscriber_identity}\n"
        f"📅 Billing Period: {payload.period}\n"
        f"💵 Amount Due: {format_amount(payload.amount)}\n"
        f"📊 Status: {status}\n"
        f"{RULE}"
    )


def _detailed_bills(payload: DetailedBills) -> str:
    lines = ["📋 **DETAILED BILLS**"]
    for index, item in enumerate(payload.items, start=1):
        paid = "✅ Paid" if item.is_paid else "❌ Unpaid"
        lines.append(f"{index}. **{item.period}**: {format_amount(item.amount)} ({paid})")
    lines.append("")
    lines.append(f"💰 Total: {payload.total_count} bills.")
    return "\n".join(lines)


def _payment_receipt(payload: PaymentReceipt) -> str:
    return (
        "✅ **PAYMENT SUCCESSFUL**\n"
        f"{RULE}\n"
        f"📱 Account: {payload.subscriber_identity}\n"
        f"📅 Period: {payload.period}\n"
        f"💵 Paid: {format_amount(payload.paid_amount)}\n"
        f"📉 Remaining Debt: {format_amount(payload.remaining_amount)}\n"
        f"📝 Status: {payload.status}\n"
        f"{RULE}"
    )


def _nothing_due(payload: NothingDue) -> str:
    return f"ℹ️ No bill found for {payload.period}. Amount: 0 TL"


def _guidance(payload: Guidance) -> str:
    return payload.message


SUCCESS_TEMPLATES: dict[SuccessKind, Callable[[Success], str]] = {
    SuccessKind.BILL_STATEMENT: lambda o: _bill_statement(o.payload),
    SuccessKind.DETAILED_BILLS: lambda o: _detailed_bills(o.payload),
    SuccessKind.EMPTY: lambda o: Replies.NO_DETAILED_BILLS,
    SuccessKind.PAYMENT_RECEIPT: lambda o: _payment_receipt(o.payload),
    SuccessKind.NOTHING_DUE: lambda o: _nothing_due(o.payload),
    SuccessKind.UNRECOGNIZED: lambda o: (
        _guidance(o.payload) if o.payload else Replies.UNRECOGNIZED
    ),
}

FAILURE_TEMPLATES: dict[ErrorKind, Callable[[Failure], str]] = {
    ErrorKind.AUTHENTICATION_ERROR: lambda f: (
        f"❌ Authentication error. Please login again with phone: {f.detail}"
    ),
    ErrorKind.RATE_LIMITED: lambda f: f.detail or Replies.SYSTEM_RATE_LIMIT,
    ErrorKind.VALIDATION_ERROR: lambda f: f"❌ Payment Failed: {f.detail}",
    ErrorKind.CONNECTIVITY_ERROR: lambda f: Replies.CONNECTIVITY,
    ErrorKind.BACKEND_ERROR: lambda f: f"❌ {f.detail}",
    ErrorKind.SYSTEM_ERROR: lambda f: f"❌ System Error: {f.detail}",
}


def format_outcome(outcome: DispatchOutcome) -> str:
    if isinstance(outcome, Success):
        return SUCCESS_TEMPLATES[outcome.kind](outcome)
    return FAILURE_TEMPLATES[outcome.error_kind](outcome)


def format_processing_error(error: BaseException) -> str:
    return Replies.PROCESSING_ERROR.format(error=str(error) or "Processing failed")
