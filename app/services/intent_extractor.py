"""
Turn free text into a fully populated Intent.

The language model does the fuzzy reading; everything it returns is then
repaired deterministically so the result is always safe to dispatch.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional, Protocol

from app.constants.extraction_prompt import ExtractionPrompt
from app.core.bill_payload import as_number
from app.core.period import DEFAULT_PERIOD, normalize_period
from app.exceptions import ConnectivityError, IntentParseError
from app.infra.logging_config import get_logger
from app.schemas.billing import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAYMENT_AMOUNT,
    Intent,
    IntentKind,
)

logger = get_logger("intent_extractor")

# Values a model echoes back when it copies the schema instead of filling it.
PLACEHOLDER_IDENTITIES = frozenset({"string", "null", "none"})

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?\d+(?:[.,]\d+)?)")


class CompletionRunner(Protocol):
    def complete(self, prompt: str) -> str: ...


def fallback_record(subscriber_identity: str) -> dict[str, Any]:
    return {
        "intent": IntentKind.QUERY_BILL.value,
        "phoneNumber": subscriber_identity,
        "month": DEFAULT_PERIOD,
        "paymentAmount": DEFAULT_PAYMENT_AMOUNT,
        "page": DEFAULT_PAGE,
        "pageSize": DEFAULT_PAGE_SIZE,
    }


def parse_record(raw: str) -> dict[str, Any]:
    """Parse a completion into an extraction record, tolerating a code fence."""
    text = _FENCE_RE.sub("", (raw or "").strip())
    try:
        record = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise IntentParseError(f"Completion is not JSON: {e}") from e
    if not isinstance(record, dict):
        raise IntentParseError(f"Completion is a JSON {type(record).__name__}")
    return record


def _kind(value: Any) -> IntentKind:
    name = str(value or "").strip().upper()
    try:
        return IntentKind(name)
    except ValueError:
        return IntentKind.UNRECOGNIZED


def _identity(value: Any, caller_identity: str) -> str:
    if value is None or isinstance(value, (dict, list, bool)):
        return caller_identity
    text = str(value).strip()
    if not text or text.lower() in PLACEHOLDER_IDENTITIES:
        return caller_identity
    return text


def _amount(value: Any) -> float:
    if isinstance(value, str):
        # "100 TL", "150 lira", "12,5"
        match = _LEADING_NUMBER_RE.match(value)
        value = match.group(1).replace(",", ".") if match else None
    number = as_number(value)
    if number is None or number < 0:
        return float(DEFAULT_PAYMENT_AMOUNT)
    return number


def _positive_int(value: Any, default: int) -> int:
    number = as_number(value.strip() if isinstance(value, str) else value)
    if number is None or int(number) < 1:
        return default
    return int(number)


def repair_record(record: dict[str, Any], caller_identity: str) -> Intent:
    """Enforce the Intent contract on an untrusted extraction record."""
    month = record.get("month")
    return Intent(
        kind=_kind(record.get("intent")),
        subscriber_identity=_identity(record.get("phoneNumber"), caller_identity),
        period=normalize_period(month if isinstance(month, str) else None),
        payment_amount=_amount(record.get("paymentAmount")),
        page=_positive_int(record.get("page"), DEFAULT_PAGE),
        page_size=_positive_int(record.get("pageSize"), DEFAULT_PAGE_SIZE),
    )


class IntentExtractor:
    def __init__(self, runner: CompletionRunner) -> None:
        self._runner = runner

    def extract(self, text: Optional[str], subscriber_identity: str) -> Intent:
        """Never raises; falls back to a default bill query on any model problem."""
        prompt = ExtractionPrompt.render(
            text or "", phone_number=subscriber_identity, default_period=DEFAULT_PERIOD
        )
        try:
            raw = self._runner.complete(prompt)
        except ConnectivityError as e:
            logger.error("LLM connection error: %s", e)
            return repair_record(fallback_record(subscriber_identity), subscriber_identity)

        try:
            record = parse_record(raw)
        except IntentParseError as e:
            logger.error("JSON parse error from LLM: %s", e)
            record = fallback_record(subscriber_identity)
        else:
            logger.info("LLM parsed result: %s", record)

        intent = repair_record(record, subscriber_identity)
        logger.info("Final parsed intent: %s", intent)
        return intent
