"""
Resource Mapper - conversions between tracked plan state and the wire payload.

`to_wire` and `from_wire` are pure and total. Round-tripping a plan through
them preserves every data field; the identifier and `last_updated` are
lifecycle fields that the reconciler sets itself.
"""

from dataclasses import replace
from typing import Any, Dict, List

from errors import ConfigurationError
from resources.billing_plan.models import (
    PLAN_SCHEMA,
    LimitItem,
    Plan,
    PricingItem,
    WireLimit,
    WirePlan,
    WirePricing,
    to_decimal,
)
from validation import validate_spec_against_schema

DATA_FIELDS = ("name", "features", "limits", "pricing")


def to_wire(plan: Plan) -> WirePlan:
    """Build the request payload for a plan. `id` is left out unless numeric."""
    return WirePlan(
        id=int(plan.id) if plan.id and plan.id.isdigit() else None,
        name=plan.name,
        features=list(plan.features),
        limits=[WireLimit(name=item.name, value=item.value) for item in plan.limits],
        pricing=[
            WirePricing(
                subscribe_for_year=item.subscribe_for_year,
                monthly_price=item.monthly_price,
                monthly_price_currency=item.monthly_price_currency,
            )
            for item in plan.pricing
        ],
    )


def from_wire(wire: WirePlan) -> Plan:
    """Build tracked state from a payload. Absent sequences become empty."""
    return Plan(
        id=None if wire.id is None else str(wire.id),
        name=wire.name or "",
        features=list(wire.features or []),
        limits=[LimitItem(name=item.name, value=item.value) for item in wire.limits or []],
        pricing=[
            PricingItem(
                subscribe_for_year=item.subscribe_for_year,
                monthly_price=item.monthly_price,
                monthly_price_currency=item.monthly_price_currency,
            )
            for item in wire.pricing or []
        ],
    )


def merge_wire(plan: Plan, wire: WirePlan) -> Plan:
    """Overlay the fields present in a payload onto tracked state."""
    remote = from_wire(wire)
    changes: Dict[str, Any] = {}
    for name in DATA_FIELDS:
        if getattr(wire, name) is not None:
            changes[name] = getattr(remote, name)
    if wire.id is not None:
        changes["id"] = remote.id
    return replace(plan, **changes)


def diff_plans(a: Plan, b: Plan) -> List[str]:
    """Names of the data fields whose values differ. Sequence order matters."""
    return [name for name in DATA_FIELDS if getattr(a, name) != getattr(b, name)]


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    """Serialize tracked state to plain types for display (prices as strings)."""
    return {
        "id": plan.id,
        "name": plan.name,
        "features": list(plan.features),
        "limits": [{"name": item.name, "value": item.value} for item in plan.limits],
        "pricing": [
            {
                "subscribe_for_year": item.subscribe_for_year,
                "monthly_price": str(item.monthly_price),
                "monthly_price_currency": item.monthly_price_currency,
            }
            for item in plan.pricing
        ],
        "last_updated": plan.last_updated,
        "state": plan.state.value,
    }


def plan_from_config(config: Dict[str, Any]) -> Plan:
    """
    Build an unmanaged plan from a declarative configuration.

    Raises:
        ConfigurationError: If the configuration does not match PLAN_SCHEMA
    """
    is_valid, error = validate_spec_against_schema(config, PLAN_SCHEMA)
    if not is_valid:
        raise ConfigurationError(f"Invalid billing plan configuration: {error}")

    return Plan(
        name=config["name"],
        features=list(config.get("features", [])),
        limits=[
            LimitItem(name=item["name"], value=item["value"])
            for item in config["limits"]
        ],
        pricing=[
            PricingItem(
                subscribe_for_year=item["subscribe_for_year"],
                monthly_price=to_decimal(item["monthly_price"]),
                monthly_price_currency=item["monthly_price_currency"],
            )
            for item in config["pricing"]
        ],
    )
