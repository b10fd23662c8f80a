# app/workflows/__init__.py
"""
HomeChef Workflows Package.

Multi-document workflows: role elevation and payment reconciliation.
"""

from app.workflows.role_elevation import (
    RoleElevationWorkflow,
    Resolution,
    generate_chef_id,
)
from app.workflows.payment_reconciliation import (
    PaymentReconciliationWorkflow,
    ConfirmationResult,
)

__all__ = [
    "RoleElevationWorkflow",
    "Resolution",
    "generate_chef_id",
    "PaymentReconciliationWorkflow",
    "ConfirmationResult",
]
