"""Adapters for external collaborators (billing backend)."""

from app.adapters.billing_client import BillingClient

__all__ = ["BillingClient"]
