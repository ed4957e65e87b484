"""Unit tests for the resource registry."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from resources.base import DriftResult, ReconcileResult, ResourceHandler
from resources.billing_plan import PlanReconciler
from resources.registry import (
    ResourceRegistry,
    get_registry,
    register_builtin_resources,
    reset_registry,
)

# ==================== Test Helpers ====================


class DummyHandler(ResourceHandler):
    """Concrete handler for testing."""

    @property
    def type_name(self) -> str:
        return "administration_dummy"

    def parse_config(self, config):
        return dict(config)

    def create(self, desired):
        return desired

    def read(self, resource_id, current=None):
        return {"id": resource_id}

    def update(self, resource_id, desired):
        return desired

    def delete(self, resource_id, current):
        return current

    def import_state(self, resource_id):
        return {"id": resource_id}

    def reconcile(self, desired, current=None):
        return ReconcileResult(success=True, plan=desired)


class BadSchemaHandler(DummyHandler):
    schema = {"type": "object", "required": "name"}

    @property
    def type_name(self) -> str:
        return "administration_bad"


# ==================== ResourceHandler Base Tests ====================


class TestResourceHandler:
    """Tests for ResourceHandler abstract base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            ResourceHandler(None)

    def test_incomplete_subclass_raises(self):
        class IncompleteHandler(ResourceHandler):
            @property
            def type_name(self):
                return "incomplete"

        with pytest.raises(TypeError):
            IncompleteHandler(None)

    def test_default_drift_detection(self):
        result = DummyHandler(None).detect_drift({})
        assert isinstance(result, DriftResult)
        assert result.has_drift is False
        assert "not supported" in result.drift_details


# ==================== ResourceRegistry Tests ====================


class TestResourceRegistry:
    """Tests for ResourceRegistry."""

    @pytest.fixture
    def registry(self):
        registry = ResourceRegistry()
        registry.register(PlanReconciler)
        return registry

    def test_register(self, registry):
        assert registry.list_resource_types() == ["administration_billing_plan"]
        assert registry.has_resource_type("administration_billing_plan")
        assert not registry.has_resource_type("administration_dummy")

    def test_get_handler_bound_to_client(self, registry):
        client = MagicMock()
        handler = registry.get_handler("administration_billing_plan", client)
        assert isinstance(handler, PlanReconciler)
        assert handler.client is client

    def test_get_handler_cached_for_client(self, registry):
        client = MagicMock()
        first = registry.get_handler("administration_billing_plan", client)
        assert registry.get_handler("administration_billing_plan", client) is first

    def test_new_client_replaces_cached_handlers(self, registry):
        client = MagicMock()
        other = MagicMock()
        first = registry.get_handler("administration_billing_plan", client)

        second = registry.get_handler("administration_billing_plan", other)

        assert second is not first
        assert second.client is other
        assert list(registry._instances.values()) == [second]
        assert registry._client is other

    def test_reregister_drops_cached_handler(self, registry):
        client = MagicMock()
        first = registry.get_handler("administration_billing_plan", client)

        registry.register(PlanReconciler)

        assert registry.get_handler("administration_billing_plan", client) is not first

    def test_unknown_type(self, registry):
        with pytest.raises(ValueError, match="administration_billing_plan"):
            registry.get_handler("administration_unknown", MagicMock())

    def test_invalid_schema_rejected(self, registry):
        with pytest.raises(ValueError, match="Invalid schema"):
            registry.register(BadSchemaHandler)
        assert not registry.has_resource_type("administration_bad")

    def test_overwrite_warns(self, registry, caplog):
        with caplog.at_level(logging.WARNING):
            registry.register(PlanReconciler)
        assert "Overwriting existing resource type" in caplog.text


# ==================== Global Registry Tests ====================


class TestGlobalRegistry:
    """Tests for the registry singleton and built-in registration."""

    def setup_method(self):
        reset_registry()

    def teardown_method(self):
        reset_registry()

    def test_singleton(self):
        assert get_registry() is get_registry()

    def test_reset(self):
        first = get_registry()
        reset_registry()
        assert get_registry() is not first

    def test_register_builtin_resources(self):
        with patch("resources.registry.entry_points", return_value=[]):
            register_builtin_resources()
        assert get_registry().list_resource_types() == ["administration_billing_plan"]

    def test_entry_point_discovery(self):
        ep = MagicMock()
        ep.name = "dummy"
        ep.load.return_value = DummyHandler
        with patch("resources.registry.entry_points", return_value=[ep]) as mock_eps:
            register_builtin_resources()
        mock_eps.assert_called_once_with(group="administration.resources")
        assert get_registry().has_resource_type("administration_dummy")

    def test_broken_entry_point_is_skipped(self, caplog):
        ep = MagicMock()
        ep.name = "broken"
        ep.load.side_effect = ImportError("missing module")
        with patch("resources.registry.entry_points", return_value=[ep]):
            with caplog.at_level(logging.WARNING):
                register_builtin_resources()
        assert "Could not load resource handler broken" in caplog.text
        assert get_registry().has_resource_type("administration_billing_plan")
