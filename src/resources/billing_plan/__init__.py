"""Billing plan resource: tracked state, wire mapping and lifecycle operations."""

from resources.billing_plan.models import (
    LimitItem,
    Plan,
    PricingItem,
    WireLimit,
    WirePlan,
    WirePricing,
)
from resources.billing_plan.reconciler import PlanReconciler

__all__ = [
    "LimitItem",
    "Plan",
    "PlanReconciler",
    "PricingItem",
    "WireLimit",
    "WirePlan",
    "WirePricing",
]
