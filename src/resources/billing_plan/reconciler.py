"""
Billing plan reconciler - lifecycle operations for tracked billing plans.

A tracked plan moves from `unmanaged` (no identifier) to `created` (the remote
plan exists) to `deleted` (terminal). Every operation checks its lifecycle
precondition before touching the network and performs exactly one API call,
except update, which writes and then reads the plan back because the update
response is not complete.

Operations on the same plan identifier must be serialized by the caller.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from errors import NotFoundError, StateError
from resources.base import DriftResult, ReconcileResult, ResourceHandler, ResourceState
from resources.billing_plan.mapper import (
    diff_plans,
    from_wire,
    merge_wire,
    plan_from_config,
    to_wire,
)
from resources.billing_plan.models import PLAN_SCHEMA, Plan

logger = logging.getLogger(__name__)

# RFC 850, e.g. "Monday, 02-Jan-06 15:04:05 UTC"
TIMESTAMP_FORMAT = "%A, %d-%b-%y %H:%M:%S UTC"


def timestamp() -> str:
    """Current time as a `last_updated` value."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _require_id(plan_id: Optional[str]) -> str:
    if not plan_id:
        raise StateError("billing plan has no identifier")
    return plan_id


def _require_state(plan: Plan, expected: ResourceState, operation: str) -> None:
    if plan.state is not expected:
        raise StateError(
            f"cannot {operation} billing plan in state '{plan.state.value}', "
            f"expected '{expected.value}'"
        )


class PlanReconciler(ResourceHandler):
    """Manages billing plans through the administration API."""

    schema = PLAN_SCHEMA

    @property
    def type_name(self) -> str:
        return "administration_billing_plan"

    def parse_config(self, config: Dict[str, Any]) -> Plan:
        """Build an unmanaged plan from a validated declarative config."""
        return plan_from_config(config)

    def create(self, desired: Plan) -> Plan:
        """
        Create a plan from desired state.

        The remote-assigned id and every field present in the response are
        merged into the returned plan. On failure the caller's plan is left
        untouched and stays unmanaged.

        Raises:
            StateError: If the plan is not unmanaged or already has an id
        """
        _require_state(desired, ResourceState.UNMANAGED, "create")
        if desired.id:
            raise StateError(
                f"cannot create billing plan that already has id {desired.id}"
            )

        created = self.client.create_plan(to_wire(desired))

        plan = merge_wire(desired, created)
        plan = replace(plan, last_updated=timestamp(), state=ResourceState.CREATED)
        logger.info(f"Created billing plan {plan.id} ({plan.name})")
        return plan

    def read(self, plan_id: str, current: Optional[Plan] = None) -> Plan:
        """
        Refresh a plan from the remote system.

        Every data field is overwritten with the remote values; local edits
        that were not applied are discarded. The identifier is the one given,
        never the one in the response. `last_updated` is carried over from
        `current` when given.

        Raises:
            StateError: If plan_id is empty or `current` was deleted
            NotFoundError: If the remote plan does not exist
        """
        plan_id = _require_id(plan_id)
        if current is not None and current.state is ResourceState.DELETED:
            raise StateError(f"cannot read deleted billing plan {plan_id}")

        remote = from_wire(self.client.get_plan(plan_id))

        return replace(
            remote,
            id=plan_id,
            last_updated=current.last_updated if current is not None else None,
            state=ResourceState.CREATED,
        )

    def update(self, plan_id: str, desired: Plan) -> Plan:
        """
        Overwrite a plan with desired state, then read it back.

        The whole plan body is sent. The write response is discarded and the
        plan is fetched again. If that read fails, the remote plan has already
        been updated although this call raises.

        Raises:
            StateError: If the plan is not created or its id would change
        """
        plan_id = _require_id(plan_id)
        _require_state(desired, ResourceState.CREATED, "update")
        if desired.id and desired.id != plan_id:
            raise StateError(
                f"billing plan id is immutable: {desired.id} != {plan_id}"
            )

        self.client.update_plan(plan_id, to_wire(desired))

        try:
            refreshed = self.read(plan_id)
        except Exception:
            logger.warning(
                f"Billing plan {plan_id} was updated but could not be read back; "
                "tracked state may not match the remote plan"
            )
            raise

        plan = replace(refreshed, last_updated=timestamp())
        logger.info(f"Updated billing plan {plan_id} ({plan.name})")
        return plan

    def delete(self, plan_id: str, current: Plan) -> Plan:
        """
        Delete a plan. An empty response body is not an error.

        Raises:
            StateError: If the plan is not created
        """
        plan_id = _require_id(plan_id)
        _require_state(current, ResourceState.CREATED, "delete")

        self.client.delete_plan(plan_id)

        logger.info(f"Deleted billing plan {plan_id}")
        return replace(current, id=plan_id, state=ResourceState.DELETED)

    def import_state(self, plan_id: str) -> Plan:
        """
        Adopt an existing remote plan into tracking.

        Raises:
            StateError: If plan_id is empty
            NotFoundError: If the remote plan does not exist
        """
        plan = self.read(plan_id)
        logger.info(f"Imported billing plan {plan.id} ({plan.name})")
        return plan

    def detect_drift(self, current: Plan) -> DriftResult:
        """Compare tracked state with the remote plan without changing either."""
        _require_state(current, ResourceState.CREATED, "check drift of")
        remote = self.read(current.id, current)

        changed = diff_plans(current, remote)
        result = DriftResult(
            has_drift=bool(changed), changed_fields=changed, remote=remote
        )
        if changed:
            result.drift_details = (
                f"Billing plan {current.id} drifted: {', '.join(changed)}"
            )
            logger.warning(result.drift_details)
        return result

    def reconcile(
        self, desired: Plan, current: Optional[Plan] = None
    ) -> ReconcileResult:
        """
        Bring the remote plan in line with desired state.

        With no tracked plan (or an unmanaged one) the plan is created. A
        created plan is refreshed and updated only when a data field differs.
        A plan that disappeared remotely is created again.

        Raises:
            StateError: If the tracked plan was deleted
        """
        if current is None or current.state is ResourceState.UNMANAGED:
            plan = self.create(replace(desired, id=None, state=ResourceState.UNMANAGED))
            return ReconcileResult(
                success=True,
                action="create",
                plan=plan,
                message=f"Created billing plan {plan.id}",
            )

        if current.state is ResourceState.DELETED:
            raise StateError(f"cannot reconcile deleted billing plan {current.id}")

        plan_id = _require_id(current.id)
        try:
            refreshed = self.read(plan_id, current)
        except NotFoundError:
            logger.warning(f"Billing plan {plan_id} no longer exists, creating it again")
            plan = self.create(replace(desired, id=None, state=ResourceState.UNMANAGED))
            return ReconcileResult(
                success=True,
                action="create",
                plan=plan,
                message=f"Billing plan {plan_id} was gone; created {plan.id}",
            )

        changed = diff_plans(desired, refreshed)
        if not changed:
            return ReconcileResult(
                success=True,
                action="noop",
                plan=refreshed,
                message=f"Billing plan {plan_id} is up to date",
            )

        plan = self.update(
            plan_id, replace(desired, id=plan_id, state=ResourceState.CREATED)
        )
        return ReconcileResult(
            success=True,
            action="update",
            plan=plan,
            changed_fields=changed,
            message=f"Updated billing plan {plan_id}: {', '.join(changed)}",
        )
