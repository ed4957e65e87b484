"""
Administration API client.

Authenticates once on construction and exposes the billing plan endpoints.
The client is built once and passed explicitly to every resource handler
that needs it.
"""

import logging
from typing import Any, Optional

import requests

from auth import Credential, CredentialManager
from config import AUTH_SERVER_URL, HOST_URL, AdministrationConfig
from errors import ProtocolError
from resources.billing_plan.models import WirePlan
from transport import DEFAULT_TIMEOUT, TransportGateway, decode_json

logger = logging.getLogger(__name__)

PLANS_PATH = "/1.0/manage/billing/plans"


class AdministrationClient:
    """Authenticated client for the administration API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        auth_server_url: str = AUTH_SERVER_URL,
        host_url: str = HOST_URL,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.auth_server_url = auth_server_url
        self.host_url = host_url
        self.session = session or requests.Session()

        manager = CredentialManager(auth_server_url, self.session, timeout)
        self.credential: Credential = manager.authenticate(client_id, client_secret)
        self.gateway = TransportGateway(
            host_url, self.credential.authorization, self.session, timeout
        )

    @classmethod
    def from_config(
        cls, cfg: AdministrationConfig, session: Optional[requests.Session] = None
    ) -> "AdministrationClient":
        """Build a client from a resolved configuration."""
        return cls(
            client_id=cfg.client_id,
            client_secret=cfg.client_secret,
            auth_server_url=cfg.auth_server,
            host_url=cfg.host,
            session=session,
        )

    def send(self, method: str, path: str, body: Any = None) -> bytes:
        """Send an authenticated request through the gateway."""
        return self.gateway.send(method, path, body)

    def _decode_plan(self, body: bytes, allow_empty: bool = False) -> WirePlan:
        if not body:
            if allow_empty:
                return WirePlan()
            raise ProtocolError("plan response body is empty")
        try:
            data = decode_json(body)
        except ValueError as e:
            raise ProtocolError(f"plan response is not valid JSON: {body!r}") from e
        if not isinstance(data, dict):
            raise ProtocolError(f"plan response is not a JSON object: {body!r}")
        try:
            return WirePlan.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise ProtocolError(f"malformed plan response: {e}") from e

    def get_plan(self, plan_id: str) -> WirePlan:
        """Return a specific plan."""
        body = self.send("GET", f"{PLANS_PATH}/{plan_id}")
        return self._decode_plan(body)

    def create_plan(self, plan: WirePlan) -> WirePlan:
        """Create a new plan. The response must carry the assigned id."""
        body = self.send("POST", PLANS_PATH, plan.to_dict())
        created = self._decode_plan(body)
        if created.id is None:
            raise ProtocolError(f"create response did not include a plan id: {body!r}")
        return created

    def update_plan(self, plan_id: str, plan: WirePlan) -> WirePlan:
        """Update a plan. The response may omit fields or be empty."""
        body = self.send("PATCH", f"{PLANS_PATH}/{plan_id}", plan.to_dict())
        return self._decode_plan(body, allow_empty=True)

    def delete_plan(self, plan_id: str) -> None:
        """Delete a plan. Any response body is ignored."""
        self.send("DELETE", f"{PLANS_PATH}/{plan_id}")
