"""
Administration provider - wires configuration, client and resource handlers.

The provider resolves configuration once, builds a single authenticated
client and hands that client to every resource handler it serves.
"""

import logging
from typing import List, Optional

import requests

from client import AdministrationClient
from config import AdministrationConfig
from errors import ConfigurationError
from resources.base import ResourceHandler
from resources.registry import ResourceRegistry, get_registry, register_builtin_resources

logger = logging.getLogger(__name__)


class AdministrationProvider:
    """Entry point for consumers that manage administration resources."""

    type_name = "administration"

    def __init__(self, version: str = "dev", registry: Optional[ResourceRegistry] = None):
        self.version = version
        self.client: Optional[AdministrationClient] = None
        if registry is None:
            registry = get_registry()
            if not registry.list_resource_types():
                register_builtin_resources(registry)
        self.registry = registry

    def configure(
        self,
        auth_server: Optional[str] = None,
        host: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> AdministrationClient:
        """
        Resolve configuration and build the authenticated client.

        Explicit arguments override the ADMINISTRATION_* environment
        variables.

        Raises:
            ConfigurationError: If a setting is missing or empty
            AuthError: If the credentials are rejected
        """
        logger.info("Configuring Administration client")
        cfg = AdministrationConfig.resolve(
            auth_server=auth_server,
            host=host,
            client_id=client_id,
            client_secret=client_secret,
        )
        logger.debug(
            f"Creating Administration client: auth_server={cfg.auth_server}, "
            f"host={cfg.host}, client_id={cfg.client_id}"
        )

        self.client = AdministrationClient.from_config(cfg, session=session)
        logger.info("Configured Administration client")
        return self.client

    def resources(self) -> List[str]:
        """Resource type names served by this provider."""
        return self.registry.list_resource_types()

    def get_resource(self, type_name: str) -> ResourceHandler:
        """
        Get the handler for a resource type, bound to the configured client.

        Raises:
            ConfigurationError: If configure() has not been called
            ValueError: If the resource type is unknown
        """
        if self.client is None:
            raise ConfigurationError(
                "Administration provider is not configured; call configure() first"
            )
        return self.registry.get_handler(type_name, self.client)
