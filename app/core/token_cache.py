"""
Per-subscriber bearer token cache with fetch-on-miss.

Tokens live for the lifetime of the process. A cached token is trusted until
the billing backend rejects it; rejection is not tracked here.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from app.exceptions import AuthenticationError, BillingGatewayError
from app.infra.logging_config import get_logger

logger = get_logger("token_cache")

LoginFn = Callable[[str], str]


@dataclass(frozen=True)
class AuthToken:
    subscriber_identity: str
    token: str
    acquired_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class TokenCache:
    """Thread-safe identity -> token map. Login runs outside the lock."""

    def __init__(self, login: LoginFn) -> None:
        self._login = login
        self._tokens: dict[str, AuthToken] = {}
        self._lock = threading.Lock()

    def get_token(self, subscriber_identity: str) -> str:
        """
        Return the cached token, logging in on a miss.

        Raises:
            AuthenticationError: login failed; nothing is cached so the next
                call retries.
        """
        cached = self.peek(subscriber_identity)
        if cached is not None:
            return cached.token

        try:
            token = self._login(subscriber_identity)
        except BillingGatewayError as e:
            logger.warning("Cannot get token for %s: %s", subscriber_identity, e)
            raise AuthenticationError(
                f"Cannot get token for {subscriber_identity}"
            ) from e
        if not token:
            raise AuthenticationError(f"Cannot get token for {subscriber_identity}")

        # Two concurrent misses may both log in; the last write wins.
        self.put(subscriber_identity, token)
        logger.info("New token acquired for: %s", subscriber_identity)
        return token

    def put(self, subscriber_identity: str, token: str) -> AuthToken:
        entry = AuthToken(subscriber_identity=subscriber_identity, token=token)
        with self._lock:
            self._tokens[subscriber_identity] = entry
        return entry

    def peek(self, subscriber_identity: str) -> Optional[AuthToken]:
        with self._lock:
            return self._tokens.get(subscriber_identity)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
