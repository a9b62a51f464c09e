"""
Execute an Intent against the billing backend.

One handler per IntentKind. Every backend error is converted into a
DispatchOutcome; dispatch() never raises.
"""

from __future__ import annotations

import json
from typing import Callable, Optional

from app.adapters.billing_client import BillingClient
from app.constants.replies import Replies
from app.core import bill_payload
from app.core.token_cache import TokenCache
from app.exceptions import (
    AuthenticationError,
    BackendError,
    BillingGatewayError,
    BillingValidationError,
    ConnectivityError,
    RateLimitedError,
)
from app.infra.logging_config import get_logger
from app.schemas.billing import (
    BillStatement,
    DetailedBillItem,
    DetailedBills,
    DispatchOutcome,
    ErrorKind,
    Failure,
    Guidance,
    Intent,
    IntentKind,
    NothingDue,
    PaymentReceipt,
    Success,
    SuccessKind,
)

logger = get_logger("billing_dispatcher")

Handler = Callable[[Intent, str], DispatchOutcome]


class BillingDispatcher:
    def __init__(self, client: BillingClient, token_cache: TokenCache) -> None:
        self._client = client
        self._token_cache = token_cache
        self.handlers: dict[IntentKind, Handler] = {
            IntentKind.QUERY_BILL: self._query_bill,
            IntentKind.QUERY_BILL_DETAILED: self._query_bill_detailed,
            IntentKind.PAY_BILL: self._pay_bill,
            IntentKind.UNRECOGNIZED: self._unrecognized,
        }

    def dispatch(self, intent: Intent) -> DispatchOutcome:
        try:
            return self._dispatch(intent)
        except AuthenticationError:
            return Failure(
                error_kind=ErrorKind.AUTHENTICATION_ERROR,
                detail=intent.subscriber_identity,
            )
        except RateLimitedError:
            return Failure(
                error_kind=ErrorKind.RATE_LIMITED, detail=Replies.SYSTEM_RATE_LIMIT
            )
        except ConnectivityError as e:
            logger.warning("Billing API unreachable: %s", e)
            return Failure(error_kind=ErrorKind.CONNECTIVITY_ERROR, detail=str(e))
        except BillingGatewayError as e:
            logger.error("API error: %s", e)
            return Failure(error_kind=ErrorKind.BACKEND_ERROR, detail=str(e))
        except Exception as e:
            logger.exception("Unexpected dispatch error")
            return Failure(error_kind=ErrorKind.SYSTEM_ERROR, detail=str(e))

    def _dispatch(self, intent: Intent) -> DispatchOutcome:
        # No backend call of any kind without a token.
        token = self._token_cache.get_token(intent.subscriber_identity)
        logger.info(
            "API call - intent: %s, phone: %s, month: %s",
            intent.kind.value,
            intent.subscriber_identity,
            intent.period,
        )
        handler = self.handlers.get(intent.kind, self._unrecognized)
        return handler(intent, token)

    def _query_bill(self, intent: Intent, token: str) -> DispatchOutcome:
        try:
            data = self._client.get_bill(token, intent.period)
        except RateLimitedError:
            return Failure(
                error_kind=ErrorKind.RATE_LIMITED, detail=Replies.QUERY_RATE_LIMIT
            )
        logger.debug("Bill API response: %s", data)
        return Success(
            kind=SuccessKind.BILL_STATEMENT,
            payload=BillStatement(
                subscriber_identity=intent.subscriber_identity,
                period=bill_payload.bill_period(data, intent.period),
                amount=bill_payload.bill_amount(data),
                is_paid=bill_payload.bill_is_paid(data),
            ),
        )

    def _query_bill_detailed(self, intent: Intent, token: str) -> DispatchOutcome:
        try:
            data = self._client.get_detailed_bills(token, intent.page, intent.page_size)
        except (BackendError, BillingValidationError) as e:
            return Failure(
                error_kind=ErrorKind.BACKEND_ERROR,
                detail=f"{Replies.DETAILED_BILLS_FAILED}: {e}",
            )
        raw_items = bill_payload.detailed_items(data)
        if not raw_items:
            return Success(kind=SuccessKind.EMPTY)
        items = [
            DetailedBillItem(
                period=str(item.get(bill_payload.PERIOD_FIELD) or "Unknown"),
                amount=bill_payload.as_number(item.get(bill_payload.AMOUNT_FIELD))
                or 0.0,
                is_paid=bool(bill_payload.paid_flag(item)),
            )
            for item in raw_items
        ]
        return Success(
            kind=SuccessKind.DETAILED_BILLS,
            payload=DetailedBills(
                items=items,
                total_count=bill_payload.detailed_total_count(data, len(items)),
            ),
        )

    def _pay_bill(self, intent: Intent, token: str) -> DispatchOutcome:
        identity = intent.subscriber_identity
        debt: Optional[float] = None
        try:
            try:
                debt = bill_payload.bill_amount(
                    self._client.get_bill(token, intent.period)
                )
                logger.info("Current debt for %s: %s TL", intent.period, debt)
            except RateLimitedError:
                # Paying matters more than the convenience check.
                logger.warning("Rate limit hit on pre-check. Proceeding with payment.")

            if debt == 0:
                return Success(
                    kind=SuccessKind.NOTHING_DUE,
                    payload=NothingDue(period=intent.period),
                )

            logger.info("Making payment: %s TL", intent.payment_amount)
            data = self._client.pay(
                token, identity, intent.period, intent.payment_amount
            )
        except BillingValidationError as e:
            logger.error("Payment rejected: %s", e.payload)
            return Failure(
                error_kind=ErrorKind.VALIDATION_ERROR,
                detail=json.dumps(e.payload, ensure_ascii=False, default=str),
            )
        except BillingGatewayError as e:
            logger.error("Payment error: %s", e)
            return Failure(
                error_kind=ErrorKind.BACKEND_ERROR, detail=Replies.PAYMENT_FAILED
            )

        remaining = bill_payload.remaining_amount(data)
        if remaining is None and debt is not None:
            remaining = debt - intent.payment_amount
        return Success(
            kind=SuccessKind.PAYMENT_RECEIPT,
            payload=PaymentReceipt(
                subscriber_identity=identity,
                period=intent.period,
                paid_amount=intent.payment_amount,
                remaining_amount=remaining,
                status=bill_payload.transaction_status(data)
                or Replies.PAYMENT_STATUS_DEFAULT,
            ),
        )

    def _unrecognized(self, intent: Intent, token: str) -> DispatchOutcome:
        return Success(
            kind=SuccessKind.UNRECOGNIZED, payload=Guidance(message=Replies.UNRECOGNIZED)
        )
