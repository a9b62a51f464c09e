"""Tests for login and health routes."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.adapters.billing_client import BillingClient
from app.core.token_cache import TokenCache
from app.exceptions import AuthenticationError, BackendError, ConnectivityError
from app.main import create_app
from app.routers.utils.dependencies import get_billing_client, get_token_cache


@pytest.fixture
def billing_client():
    return MagicMock(spec=BillingClient)


@pytest.fixture
def token_cache(billing_client):
    return TokenCache(login=billing_client.login)


@pytest.fixture
def client(billing_client, token_cache):
    app = create_app(testing=True)
    app.dependency_overrides[get_billing_client] = lambda: billing_client
    app.dependency_overrides[get_token_cache] = lambda: token_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_login_success_seeds_cache(client, billing_client, token_cache):
    billing_client.login.return_value = "tok-1"

    resp = client.post("/api/login", json={"phoneNumber": " 5551234567 "})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "token": "tok-1",
        "phoneNumber": "5551234567",
    }
    billing_client.login.assert_called_once_with("5551234567")
    assert token_cache.get_token("5551234567") == "tok-1"
    assert billing_client.login.call_count == 1


@pytest.mark.parametrize("body", [{}, {"phoneNumber": ""}, {"phoneNumber": "   "}])
def test_login_requires_phone(client, billing_client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Phone number is required"
    billing_client.login.assert_not_called()


def test_login_rejected(client, billing_client):
    billing_client.login.side_effect = AuthenticationError(
        "Invalid phone number or not registered"
    )
    resp = client.post("/api/login", json={"phoneNumber": "5551234567"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid phone number or not registered"


def test_login_backend_unreachable(client, billing_client):
    billing_client.login.side_effect = ConnectivityError("refused")
    resp = client.post("/api/login", json={"phoneNumber": "5551234567"})
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Cannot connect to billing server"


def test_login_backend_failure(client, billing_client, token_cache):
    billing_client.login.side_effect = BackendError("status 500", 500)
    resp = client.post("/api/login", json={"phoneNumber": "5551234567"})
    assert resp.status_code == 500
    assert token_cache.peek("5551234567") is None


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["service"] == "Billing Gateway"
    assert body["timestamp"]
