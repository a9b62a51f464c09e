"""
Billing intent and dispatch outcome contracts.

An Intent is always fully populated; a DispatchOutcome is either a Success
with a typed payload or a Failure with a classified error kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAYMENT_AMOUNT = 0
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


class IntentKind(str, Enum):
    QUERY_BILL = "QUERY_BILL"
    QUERY_BILL_DETAILED = "QUERY_BILL_DETAILED"
    PAY_BILL = "PAY_BILL"
    UNRECOGNIZED = "UNRECOGNIZED"


class Intent(BaseModel):
    """What a single chat message asks the billing backend to do."""

    kind: IntentKind
    subscriber_identity: str
    period: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    payment_amount: float = Field(DEFAULT_PAYMENT_AMOUNT, ge=0)
    page: int = Field(DEFAULT_PAGE, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)

    model_config = ConfigDict(frozen=True)


# -----------------------------------------------------------------------------
# Success payloads
# -----------------------------------------------------------------------------


class SuccessKind(str, Enum):
    BILL_STATEMENT = "bill_statement"
    DETAILED_BILLS = "detailed_bills"
    EMPTY = "empty"
    PAYMENT_RECEIPT = "payment_receipt"
    NOTHING_DUE = "nothing_due"
    UNRECOGNIZED = "unrecognized"


class BillStatement(BaseModel):
    subscriber_identity: str
    period: str
    amount: float
    is_paid: bool


class DetailedBillItem(BaseModel):
    period: str
    amount: float
    is_paid: bool


class DetailedBills(BaseModel):
    items: list[DetailedBillItem]
    total_count: int


class PaymentReceipt(BaseModel):
    subscriber_identity: str
    period: str
    paid_amount: float
    remaining_amount: Optional[float] = None  # None when the debt baseline is unknown
    status: str


class NothingDue(BaseModel):
    period: str


class Guidance(BaseModel):
    message: str


SuccessPayload = Union[
    BillStatement, DetailedBills, PaymentReceipt, NothingDue, Guidance
]


# -----------------------------------------------------------------------------
# Outcome union
# -----------------------------------------------------------------------------


class ErrorKind(str, Enum):
    AUTHENTICATION_ERROR = "authentication_error"
    RATE_LIMITED = "rate_limited"
    VALIDATION_ERROR = "validation_error"
    CONNECTIVITY_ERROR = "connectivity_error"
    BACKEND_ERROR = "backend_error"
    SYSTEM_ERROR = "system_error"


class Success(BaseModel):
    status: Literal["success"] = "success"
    kind: SuccessKind
    payload: Optional[SuccessPayload] = None


class Failure(BaseModel):
    status: Literal["failure"] = "failure"
    error_kind: ErrorKind
    detail: str = ""


DispatchOutcome = Annotated[Union[Success, Failure], Field(discriminator="status")]
