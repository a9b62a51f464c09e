"""Tests for reply formatting."""

from app.constants.replies import Replies
from app.schemas.billing import (
    BillStatement,
    DetailedBillItem,
    DetailedBills,
    ErrorKind,
    Failure,
    Guidance,
    NothingDue,
    PaymentReceipt,
    Success,
    SuccessKind,
)
from app.services.response_formatter import (
    FAILURE_TEMPLATES,
    SUCCESS_TEMPLATES,
    format_amount,
    format_outcome,
    format_processing_error,
)


def test_templates_cover_every_tag():
    assert set(SUCCESS_TEMPLATES) == set(SuccessKind)
    assert set(FAILURE_TEMPLATES) == set(ErrorKind)


def test_format_amount():
    assert format_amount(150.0) == "150 TL"
    assert format_amount(12.5) == "12.5 TL"
    assert format_amount(-25) == "-25 TL"
    assert format_amount(None) == "unknown"


def test_bill_statement_unpaid():
    text = format_outcome(
        Success(
            kind=SuccessKind.BILL_STATEMENT,
            payload=BillStatement(
                subscriber_identity="5551234567",
                period="2024-10",
                amount=150,
                is_paid=False,
            ),
        )
    )
    assert "BILL STATEMENT" in text
    assert "Account: 5551234567" in text
    assert "Billing Period: 2024-10" in text
    assert "150 TL" in text
    assert "UNPAID" in text


def test_bill_statement_paid():
    text = format_outcome(
        Success(
            kind=SuccessKind.BILL_STATEMENT,
            payload=BillStatement(
                subscriber_identity="5551234567", period="2024-10", amount=0, is_paid=True
            ),
        )
    )
    assert "✅ PAID" in text
    assert "UNPAID" not in text


def test_detailed_bills_numbered_with_count():
    text = format_outcome(
        Success(
            kind=SuccessKind.DETAILED_BILLS,
            payload=DetailedBills(
                items=[
                    DetailedBillItem(period="2024-08", amount=100, is_paid=True),
                    DetailedBillItem(period="2024-09", amount=120.5, is_paid=False),
                ],
                total_count=7,
            ),
        )
    )
    lines = text.splitlines()
    assert lines[0] == "📋 **DETAILED BILLS**"
    assert lines[1] == "1. **2024-08**: 100 TL (✅ Paid)"
    assert lines[2] == "2. **2024-09**: 120.5 TL (❌ Unpaid)"
    assert lines[-1] == "💰 Total: 7 bills."


def test_payment_receipt():
    text = format_outcome(
        Success(
            kind=SuccessKind.PAYMENT_RECEIPT,
            payload=PaymentReceipt(
                subscriber_identity="5551234567",
                period="2024-10",
                paid_amount=50,
                remaining_amount=150,
                status="Processing Complete",
            ),
        )
    )
    assert "PAYMENT SUCCESSFUL" in text
    assert "Paid: 50 TL" in text
    assert "Remaining Debt: 150 TL" in text
    assert "Status: Processing Complete" in text


def test_one_liners():
    assert format_outcome(Success(kind=SuccessKind.EMPTY)) == Replies.NO_DETAILED_BILLS
    assert (
        format_outcome(
            Success(kind=SuccessKind.NOTHING_DUE, payload=NothingDue(period="2024-10"))
        )
        == "ℹ️ No bill found for 2024-10. Amount: 0 TL"
    )
    assert (
        format_outcome(
            Success(
                kind=SuccessKind.UNRECOGNIZED,
                payload=Guidance(message=Replies.UNRECOGNIZED),
            )
        )
        == Replies.UNRECOGNIZED
    )


def test_failures():
    auth = Failure(error_kind=ErrorKind.AUTHENTICATION_ERROR, detail="5551234567")
    assert "login again with phone: 5551234567" in format_outcome(auth)

    limited = Failure(error_kind=ErrorKind.RATE_LIMITED, detail=Replies.QUERY_RATE_LIMIT)
    assert format_outcome(limited) == Replies.QUERY_RATE_LIMIT

    invalid = Failure(error_kind=ErrorKind.VALIDATION_ERROR, detail='{"error": "bad"}')
    assert format_outcome(invalid) == '❌ Payment Failed: {"error": "bad"}'

    offline = Failure(error_kind=ErrorKind.CONNECTIVITY_ERROR, detail="timeout")
    assert format_outcome(offline) == Replies.CONNECTIVITY

    system = Failure(error_kind=ErrorKind.SYSTEM_ERROR, detail="boom")
    assert format_outcome(system) == "❌ System Error: boom"


def test_deterministic():
    outcome = Failure(error_kind=ErrorKind.BACKEND_ERROR, detail="x")
    assert format_outcome(outcome) == format_outcome(outcome)


def test_processing_error():
    assert "PROCESSING ERROR" in format_processing_error(RuntimeError("db gone"))
    assert "Processing failed" in format_processing_error(RuntimeError())
