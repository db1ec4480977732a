"""Domain services."""

from .account_service import AccountService
from .base import Service
from .identity_reconciler import IdentityReconciler, Reconciliation

__all__ = [
    "AccountService",
    "IdentityReconciler",
    "Reconciliation",
    "Service",
]
