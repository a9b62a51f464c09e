from __future__ import annotations

import threading
from typing import Optional

from app.adapters.billing_client import BillingClient, build_billing_client_from_env
from app.core.token_cache import TokenCache
from app.workers.llm import LLMRunner, build_llm_runner_from_env


class AppState:
    """Process-lifetime collaborators, built on first use."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._billing_client: Optional[BillingClient] = None
        self._token_cache: Optional[TokenCache] = None
        self._llm_runner: Optional[LLMRunner] = None

    @property
    def billing_client(self) -> BillingClient:
        with self._lock:
            if self._billing_client is None:
                self._billing_client = build_billing_client_from_env()
            return self._billing_client

    @property
    def token_cache(self) -> TokenCache:
        client = self.billing_client
        with self._lock:
            if self._token_cache is None:
                self._token_cache = TokenCache(login=client.login)
            return self._token_cache

    @property
    def llm_runner(self) -> LLMRunner:
        with self._lock:
            if self._llm_runner is None:
                self._llm_runner = build_llm_runner_from_env()
            return self._llm_runner


state = AppState()
