"""
Resource Registry - Discovery and registration of resource handlers.

This module provides the central registry for resource types, handling
registration, discovery and instantiation of handlers bound to a client.
"""

import logging
from importlib.metadata import entry_points
from typing import Any, Dict, List, Optional, Type

from resources.base import ResourceHandler
from validation import validate_schema

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "administration.resources"


class ResourceRegistry:
    """
    Central registry for resource handlers.

    Handler classes are registered by resource type name. Instances are
    created lazily and cached for the most recently used client only.
    """

    def __init__(self):
        # Registered handler classes (not instantiated)
        self._handlers: Dict[str, Type[ResourceHandler]] = {}

        # Instantiated handlers bound to _client, keyed by type name
        self._client: Any = None
        self._instances: Dict[str, ResourceHandler] = {}

    # Registration methods

    def register(self, handler_class: Type[ResourceHandler]) -> None:
        """
        Register a resource handler class.

        Args:
            handler_class: The ResourceHandler subclass to register

        Raises:
            ValueError: If the handler declares an invalid configuration schema
        """
        # Temporary unbound instance to read the type name
        type_name = handler_class(None).type_name

        if handler_class.schema is not None:
            is_valid, error = validate_schema(handler_class.schema)
            if not is_valid:
                raise ValueError(f"Resource type '{type_name}': {error}")

        if type_name in self._handlers:
            logger.warning(f"Overwriting existing resource type: {type_name}")

        self._handlers[type_name] = handler_class
        self._instances.pop(type_name, None)
        logger.info(f"Registered resource type: {type_name}")

    # Instantiation methods

    def get_handler(self, type_name: str, client: Any) -> ResourceHandler:
        """
        Get a handler instance bound to a client.

        Args:
            type_name: The resource type name
            client: The configured AdministrationClient

        Returns:
            A ResourceHandler instance

        Raises:
            ValueError: If the resource type is not registered
        """
        if type_name not in self._handlers:
            available = ", ".join(self._handlers.keys()) or "none"
            raise ValueError(
                f"Unknown resource type: {type_name}. Available types: {available}"
            )

        if client is not self._client:
            self._client = client
            self._instances = {}

        if type_name not in self._instances:
            self._instances[type_name] = self._handlers[type_name](client)
            logger.debug(f"Instantiated handler for resource type: {type_name}")

        return self._instances[type_name]

    # Discovery methods

    def list_resource_types(self) -> List[str]:
        """List all registered resource type names."""
        return list(self._handlers.keys())

    def has_resource_type(self, type_name: str) -> bool:
        """Check if a resource type is registered."""
        return type_name in self._handlers


# Global registry instance
_registry: Optional[ResourceRegistry] = None


def get_registry() -> ResourceRegistry:
    """Get the global resource registry singleton."""
    global _registry
    if _registry is None:
        _registry = ResourceRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (mainly for testing)."""
    global _registry
    _registry = None


def register_builtin_resources(registry: Optional[ResourceRegistry] = None) -> None:
    """
    Register the built-in resource types and discover additional handlers
    via entry points.
    """
    registry = registry or get_registry()

    from resources.billing_plan import PlanReconciler

    registry.register(PlanReconciler)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            registry.register(ep.load())
        except Exception as e:
            logger.warning(f"Could not load resource handler {ep.name}: {e}")
