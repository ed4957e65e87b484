"""Unit tests for the billing plan Resource Mapper."""

from dataclasses import replace
from decimal import Decimal

import pytest

from errors import ConfigurationError
from resources.base import ResourceState
from resources.billing_plan.mapper import (
    DATA_FIELDS,
    diff_plans,
    from_wire,
    merge_wire,
    plan_from_config,
    plan_to_dict,
    to_wire,
)
from resources.billing_plan.models import (
    LimitItem,
    Plan,
    PricingItem,
    WireLimit,
    WirePlan,
)

ROUND_TRIP_PLANS = [
    Plan(name="Empty"),
    Plan(
        name="Pro",
        features=["sso"],
        limits=[LimitItem("seats", 10)],
        pricing=[PricingItem(1, Decimal("9.99"), "USD")],
    ),
    Plan(
        name="Entreprise – Été",
        features=["sso", "audit", "sso"],
        limits=[LimitItem("seats", 0), LimitItem("projects", -1)],
        pricing=[
            PricingItem(3, Decimal("7.50"), "EUR"),
            PricingItem(1, Decimal("10"), "EUR"),
        ],
    ),
]


class TestToWire:
    """Tests for to_wire."""

    def test_omits_unset_id(self, sample_plan):
        payload = to_wire(sample_plan).to_dict()
        assert "id" not in payload

    def test_includes_numeric_id(self, sample_plan):
        payload = to_wire(replace(sample_plan, id="42")).to_dict()
        assert payload["id"] == 42

    def test_empty_sequences_are_serialized(self):
        payload = to_wire(Plan(name="Bare")).to_dict()
        assert payload == {"name": "Bare", "features": [], "limits": [], "pricing": []}

    def test_timestamp_and_state_not_sent(self, sample_plan):
        plan = replace(sample_plan, last_updated="now", state=ResourceState.CREATED)
        payload = to_wire(plan).to_dict()
        assert set(payload) == {"name", "features", "limits", "pricing"}

    def test_payload_shape(self, sample_plan):
        assert to_wire(sample_plan).to_dict() == {
            "name": "Pro",
            "features": ["sso"],
            "limits": [{"name": "seats", "value": 10}],
            "pricing": [
                {
                    "subscribe_for_year": 1,
                    "monthly_price": Decimal("9.99"),
                    "monthly_price_currency": "USD",
                }
            ],
        }


class TestFromWire:
    """Tests for from_wire and WirePlan.from_dict."""

    def test_reconstructs_fields(self, sample_plan_data, sample_plan):
        plan = from_wire(WirePlan.from_dict(sample_plan_data))
        assert plan.id == "42"
        for name in DATA_FIELDS:
            assert getattr(plan, name) == getattr(sample_plan, name)

    def test_unknown_fields_ignored(self, sample_plan_data):
        sample_plan_data["created_at"] = "2024-01-01"
        sample_plan_data["limits"][0]["unit"] = "users"
        plan = from_wire(WirePlan.from_dict(sample_plan_data))
        assert plan.limits == [LimitItem("seats", 10)]

    def test_absent_sequences_become_empty(self):
        plan = from_wire(WirePlan.from_dict({"id": 1, "name": "Pro"}))
        assert plan.features == []
        assert plan.limits == []
        assert plan.pricing == []

    def test_integer_price_becomes_decimal(self):
        wire = WirePlan.from_dict(
            {
                "pricing": [
                    {
                        "subscribe_for_year": 2,
                        "monthly_price": 10,
                        "monthly_price_currency": "USD",
                    }
                ]
            }
        )
        assert wire.pricing[0].monthly_price == Decimal("10")
        assert isinstance(wire.pricing[0].monthly_price, Decimal)


class TestRoundTrip:
    """from_wire(to_wire(plan)) keeps every data field."""

    @pytest.mark.parametrize("plan", ROUND_TRIP_PLANS, ids=lambda p: p.name)
    def test_round_trip(self, plan):
        assert from_wire(to_wire(plan)) == plan

    @pytest.mark.parametrize("plan", ROUND_TRIP_PLANS, ids=lambda p: p.name)
    def test_round_trip_through_payload(self, plan):
        restored = from_wire(WirePlan.from_dict(to_wire(plan).to_dict()))
        assert diff_plans(plan, restored) == []


class TestMergeWire:
    """Tests for merge_wire."""

    def test_present_fields_override(self, sample_plan):
        wire = WirePlan(id=7, name="Pro Plus", features=[])
        merged = merge_wire(sample_plan, wire)
        assert merged.id == "7"
        assert merged.name == "Pro Plus"
        assert merged.features == []
        assert merged.limits == sample_plan.limits
        assert merged.pricing == sample_plan.pricing

    def test_does_not_mutate_input(self, sample_plan):
        merge_wire(sample_plan, WirePlan(id=7, name="Other"))
        assert sample_plan.id is None
        assert sample_plan.name == "Pro"

    def test_remote_populated_fields(self, sample_plan):
        wire = WirePlan(id=7, limits=[WireLimit("seats", 10), WireLimit("api", 100)])
        merged = merge_wire(sample_plan, wire)
        assert merged.limits == [LimitItem("seats", 10), LimitItem("api", 100)]


class TestDiffPlans:
    """Tests for diff_plans."""

    def test_identical(self, sample_plan):
        assert diff_plans(sample_plan, replace(sample_plan)) == []

    def test_lifecycle_fields_ignored(self, sample_plan):
        other = replace(sample_plan, id="42", last_updated="x", state=ResourceState.CREATED)
        assert diff_plans(sample_plan, other) == []

    def test_field_level(self, sample_plan):
        other = replace(
            sample_plan,
            features=["sso", "audit"],
            pricing=[PricingItem(1, Decimal("12.00"), "USD")],
        )
        assert diff_plans(sample_plan, other) == ["features", "pricing"]

    def test_order_matters(self):
        a = Plan(name="p", features=["a", "b"])
        b = Plan(name="p", features=["b", "a"])
        assert diff_plans(a, b) == ["features"]


class TestTrackedStateDict:
    """Tests for plan_to_dict."""

    def test_to_dict(self, sample_plan):
        data = plan_to_dict(replace(sample_plan, id="42", state=ResourceState.CREATED))
        assert data["id"] == "42"
        assert data["state"] == "created"
        assert data["pricing"][0]["monthly_price"] == "9.99"
        assert data["last_updated"] is None


class TestPlanFromConfig:
    """Tests for plan_from_config."""

    def test_valid(self, sample_config, sample_plan):
        plan = plan_from_config(sample_config)
        assert plan == sample_plan
        assert plan.state is ResourceState.UNMANAGED
        assert plan.id is None

    def test_float_price_is_exact_decimal(self, sample_config):
        plan = plan_from_config(sample_config)
        assert plan.pricing[0].monthly_price == Decimal("9.99")

    def test_features_default_empty(self, sample_config):
        del sample_config["features"]
        assert plan_from_config(sample_config).features == []

    def test_invalid_raises(self, sample_config):
        del sample_config["pricing"]
        with pytest.raises(ConfigurationError, match="pricing"):
            plan_from_config(sample_config)

