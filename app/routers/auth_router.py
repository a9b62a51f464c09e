"""
Login and health routes used by the chat UI.

Login seeds the same token cache the message pipeline reads from.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from app.adapters.billing_client import BillingClient
from app.core.token_cache import TokenCache
from app.exceptions import AuthenticationError, BillingGatewayError, ConnectivityError
from app.infra.logging_config import get_logger
from app.routers.utils.dependencies import get_billing_client, get_token_cache
from app.schemas.chat import HealthResponse, LoginRequest, LoginResponse

logger = get_logger("auth_router")

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    client: BillingClient = Depends(get_billing_client),
    token_cache: TokenCache = Depends(get_token_cache),
) -> LoginResponse:
    """
    Log a subscriber in against the billing backend and cache the token.

    Raises:
        HTTPException: 400 without a phone number, 401 when the backend
            rejects it, 503 when the backend is unreachable, 500 otherwise.
    """
    phone_number = (body.phone_number or "").strip()
    if not phone_number:
        raise HTTPException(status_code=400, detail="Phone number is required")

    logger.info("Login attempt: %s", phone_number)
    try:
        token = client.login(phone_number)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    except ConnectivityError as e:
        logger.error("Login error: %s", e)
        raise HTTPException(
            status_code=503, detail="Cannot connect to billing server"
        ) from e
    except BillingGatewayError as e:
        logger.error("Login error: %s", e)
        raise HTTPException(
            status_code=500, detail="Server error. Please try again."
        ) from e

    token_cache.put(phone_number, token)
    logger.info("Login successful: %s", phone_number)
    return LoginResponse(success=True, token=token, phone_number=phone_number)


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(timezone.utc))
