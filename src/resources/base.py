"""
Resource Handler Base - Abstract interface for managed resource types.

A resource handler maps one declarative resource type onto the remote
administration API. Handlers are constructed once with a configured client
and are then shared by every caller that manages resources of that type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ResourceState(Enum):
    """Lifecycle stage of a tracked resource instance."""

    UNMANAGED = "unmanaged"
    CREATED = "created"
    DELETED = "deleted"


@dataclass
class ReconcileResult:
    """Result from a reconcile() call."""

    success: bool = False
    action: str = "noop"
    plan: Optional[Any] = None
    changed_fields: List[str] = field(default_factory=list)
    message: str = ""


@dataclass
class DriftResult:
    """Result from drift detection."""

    has_drift: bool = False
    drift_details: str = ""
    changed_fields: List[str] = field(default_factory=list)
    remote: Optional[Any] = None


class ResourceHandler(ABC):
    """
    Abstract base class for resource handlers.

    Implementations provide the create/read/update/delete/import operations
    for one resource type. All operations are synchronous and surface every
    failure to the caller.
    """

    # JSON Schema of the declarative configuration, if the type has one
    schema: Optional[Dict[str, Any]] = None

    def __init__(self, client):
        self.client = client

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Unique resource type name (e.g., 'administration_billing_plan')."""
        pass

    @abstractmethod
    def parse_config(self, config: Dict[str, Any]) -> Any:
        """
        Build unmanaged tracked state from a declarative configuration.

        Raises:
            ConfigurationError: If the configuration does not match `schema`
        """
        pass

    @abstractmethod
    def create(self, desired: Any) -> Any:
        """
        Create the remote resource from desired state.

        Args:
            desired: Tracked state in the unmanaged stage

        Returns:
            Tracked state in the created stage, with its identifier assigned.
        """
        pass

    @abstractmethod
    def read(self, resource_id: str, current: Optional[Any] = None) -> Any:
        """
        Refresh tracked state from the remote resource.

        Args:
            resource_id: Identifier of the remote resource
            current: Previously tracked state, if any

        Returns:
            Tracked state reflecting the remote resource.
        """
        pass

    @abstractmethod
    def update(self, resource_id: str, desired: Any) -> Any:
        """
        Overwrite the remote resource with desired state.

        Args:
            resource_id: Identifier of the remote resource
            desired: Tracked state in the created stage carrying new values

        Returns:
            Tracked state reflecting the remote resource after the update.
        """
        pass

    @abstractmethod
    def delete(self, resource_id: str, current: Any) -> Any:
        """
        Remove the remote resource.

        Args:
            resource_id: Identifier of the remote resource
            current: Tracked state in the created stage

        Returns:
            Tracked state in the deleted stage.
        """
        pass

    @abstractmethod
    def import_state(self, resource_id: str) -> Any:
        """
        Adopt an existing remote resource into tracking.

        Args:
            resource_id: Identifier of the remote resource

        Returns:
            Tracked state in the created stage.
        """
        pass

    @abstractmethod
    def reconcile(self, desired: Any, current: Optional[Any] = None) -> ReconcileResult:
        """
        Bring the remote resource in line with desired state.

        Args:
            desired: Desired state, usually from parse_config()
            current: Previously tracked state, if any

        Returns:
            ReconcileResult naming the action taken and the new tracked state.
        """
        pass

    def detect_drift(self, current: Any) -> DriftResult:
        """
        Detect drift between tracked and remote state.

        This is an optional method with a default implementation that returns
        no drift. Handlers that support drift detection should override this.
        """
        return DriftResult(
            has_drift=False, drift_details="Drift detection not supported"
        )
