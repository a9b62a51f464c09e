"""
Error taxonomy for the billing gateway.

Adapters raise these; the dispatcher turns them into DispatchOutcome values
and the routers turn them into HTTP errors. Nothing here reaches the user raw.
"""

from __future__ import annotations

from typing import Any, Optional


class BillingGatewayError(Exception):
    """Base class for every error the gateway classifies."""


class IntentParseError(BillingGatewayError):
    """The language model returned something that is not an extraction record."""


class AuthenticationError(BillingGatewayError):
    """No usable token could be obtained for a subscriber."""


class RateLimitedError(BillingGatewayError):
    """The billing backend answered 429."""


class BillingValidationError(BillingGatewayError):
    """The billing backend rejected the request shape or semantics (HTTP 400)."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ConnectivityError(BillingGatewayError):
    """Timeout or unreachable billing backend / language model service."""


class BackendError(BillingGatewayError):
    """Any other non-2xx response from the billing backend."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
