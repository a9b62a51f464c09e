"""
HTTP client for the billing backend.

Maps transport failures and non-2xx statuses onto the gateway error
taxonomy so callers never see a raw requests exception.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from app.config import get_settings
from app.exceptions import (
    AuthenticationError,
    BackendError,
    BillingValidationError,
    ConnectivityError,
    RateLimitedError,
)
from app.infra.logging_config import get_logger

logger = get_logger("billing_client")

LOGIN_PATH = "/Auth/login"
BILLS_PATH = "/Subscriber/bills"
DETAILED_BILLS_PATH = "/Subscriber/bills/detailed"
PAYMENT_PATH = "/Payment/pay"

TIMEOUT_SECONDS = 10


class BillingClient:
    """Thin wrapper over the billing REST API. One instance per process."""

    def __init__(
        self,
        base_url: str,
        timeout: float = TIMEOUT_SECONDS,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.verify = verify_ssl

    def login(self, phone_number: str) -> str:
        """
        Exchange a subscriber identity for a bearer token.

        Raises:
            AuthenticationError: backend answered 401 or returned no token.
            ConnectivityError: backend unreachable or timed out.
            BackendError: any other failure status.
        """
        try:
            data = self._request("POST", LOGIN_PATH, json={"phoneNumber": phone_number})
        except BackendError as e:
            if e.status_code in (401, 403):
                raise AuthenticationError(
                    "Invalid phone number or not registered"
                ) from e
            raise
        token = data.get("token")
        if not token:
            raise AuthenticationError("Invalid phone number")
        return str(token)

    def get_bill(self, token: str, period: str) -> dict[str, Any]:
        return self._request("GET", BILLS_PATH, token=token, params={"month": period})

    def get_detailed_bills(
        self, token: str, page: int, page_size: int
    ) -> dict[str, Any]:
        return self._request(
            "GET",
            DETAILED_BILLS_PATH,
            token=token,
            params={"page": page, "pageSize": page_size},
        )

    def pay(
        self, token: str, phone_number: str, period: str, amount: float
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            PAYMENT_PATH,
            token=token,
            json={
                "phoneNumber": phone_number,
                "month": period,
                "paymentAmount": amount,
            },
        )

    def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            resp = self._session.request(
                method, url, headers=headers, timeout=self._timeout, **kwargs
            )
        except requests.Timeout as e:
            raise ConnectivityError(f"Billing API timed out: {method} {path}") from e
        except requests.RequestException as e:
            raise ConnectivityError(f"Cannot connect to billing server: {e}") from e

        if resp.status_code == 429:
            raise RateLimitedError(f"Rate limited: {method} {path}")
        if resp.status_code == 400:
            raise BillingValidationError(
                f"Billing API rejected {method} {path}", payload=_body(resp)
            )
        if resp.status_code >= 400:
            raise BackendError(
                f"Request failed with status code {resp.status_code}",
                status_code=resp.status_code,
            )

        data = _body(resp)
        if not isinstance(data, dict):
            logger.warning("Unexpected %s payload from %s", type(data).__name__, path)
            return {}
        return data


def _body(resp: requests.Response) -> Any:
    """Decoded JSON body, the raw text when it is not JSON, or None when empty."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


def build_billing_client_from_env() -> BillingClient:
    settings = get_settings()
    logger.info(
        "Billing client config: url=%s, verify_ssl=%s, timeout=%ss",
        settings.billing_api_url,
        settings.billing_verify_ssl,
        settings.billing_timeout_seconds,
    )
    return BillingClient(
        base_url=settings.billing_api_url,
        timeout=settings.billing_timeout_seconds,
        verify_ssl=settings.billing_verify_ssl,
    )
