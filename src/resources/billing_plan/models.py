"""
Billing plan types.

Two shapes describe the same plan: the tracked state held by consumers
(`Plan`) and the payload exchanged with the administration API (`WirePlan`).
The mapper module converts between them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from resources.base import ResourceState


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# Tracked state


@dataclass
class LimitItem:
    """A named usage limit."""

    name: str
    value: int


@dataclass
class PricingItem:
    """Monthly price for a subscription length in years."""

    subscribe_for_year: int
    monthly_price: Decimal
    monthly_price_currency: str


@dataclass
class Plan:
    """
    Tracked state of a billing plan.

    `id` is unset until the remote system assigns one and never changes
    afterwards. `last_updated` is stamped locally on create and update and is
    never sent to the API.
    """

    name: str
    features: List[str] = field(default_factory=list)
    limits: List[LimitItem] = field(default_factory=list)
    pricing: List[PricingItem] = field(default_factory=list)
    id: Optional[str] = None
    last_updated: Optional[str] = None
    state: ResourceState = ResourceState.UNMANAGED


# Wire representation


@dataclass
class WireLimit:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WireLimit":
        return cls(name=data.get("name", ""), value=int(data.get("value", 0)))


@dataclass
class WirePricing:
    subscribe_for_year: int
    monthly_price: Decimal
    monthly_price_currency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subscribe_for_year": self.subscribe_for_year,
            "monthly_price": self.monthly_price,
            "monthly_price_currency": self.monthly_price_currency,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WirePricing":
        return cls(
            subscribe_for_year=int(data.get("subscribe_for_year", 0)),
            monthly_price=to_decimal(data.get("monthly_price", 0)),
            monthly_price_currency=data.get("monthly_price_currency", ""),
        )


@dataclass
class WirePlan:
    """
    Plan payload of the administration API.

    Responses may omit fields (the update endpoint does), so every field is
    optional here; None means "absent from the payload".
    """

    name: Optional[str] = None
    features: Optional[List[str]] = None
    limits: Optional[List[WireLimit]] = None
    pricing: Optional[List[WirePricing]] = None
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Request payload. Sequences are always present, `id` only when set."""
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        payload["name"] = self.name or ""
        payload["features"] = list(self.features or [])
        payload["limits"] = [item.to_dict() for item in self.limits or []]
        payload["pricing"] = [item.to_dict() for item in self.pricing or []]
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WirePlan":
        """Parse a response payload, ignoring unknown fields."""
        features = data.get("features")
        limits = data.get("limits")
        pricing = data.get("pricing")
        raw_id = data.get("id")
        return cls(
            name=data.get("name"),
            features=None if features is None else [str(f) for f in features],
            limits=None if limits is None else [WireLimit.from_dict(i) for i in limits],
            pricing=(
                None if pricing is None else [WirePricing.from_dict(i) for i in pricing]
            ),
            id=None if raw_id is None else int(raw_id),
        )


# Declarative configuration schema (JSON Schema Draft 7)

PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "description": "Manages a billing plan.",
    "required": ["name", "limits", "pricing"],
    "additionalProperties": False,
    "properties": {
        "name": {
            "type": "string",
            "minLength": 1,
            "description": "Name of the plan.",
        },
        "features": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of features of the plan.",
        },
        "limits": {
            "type": "array",
            "description": "List of limits of the plan.",
            "items": {
                "type": "object",
                "required": ["name", "value"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "description": "Name of limit."},
                    "value": {"type": "integer", "description": "Value of limit."},
                },
            },
        },
        "pricing": {
            "type": "array",
            "description": "List of pricing of the plan.",
            "items": {
                "type": "object",
                "required": [
                    "subscribe_for_year",
                    "monthly_price",
                    "monthly_price_currency",
                ],
                "additionalProperties": False,
                "properties": {
                    "subscribe_for_year": {
                        "type": "integer",
                        "description": "Number of year of subscription.",
                    },
                    "monthly_price": {
                        "type": "number",
                        "description": "Monthly pricing.",
                    },
                    "monthly_price_currency": {
                        "type": "string",
                        "description": "Monthly currency.",
                    },
                },
            },
        },
    },
}
