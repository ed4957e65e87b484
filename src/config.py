"""
Configuration module for the administration client.

Loads configuration from explicit values with environment variable fallback.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from errors import ConfigurationError

AUTH_SERVER_URL = "https://auth.quortex.io"
HOST_URL = "https://api.quortex.io"

ENV_AUTH_SERVER = "ADMINISTRATION_AUTH_SERVER"
ENV_HOST = "ADMINISTRATION_HOST"
ENV_CLIENT_ID = "ADMINISTRATION_CLIENT_ID"
ENV_CLIENT_SECRET = "ADMINISTRATION_CLIENT_SECRET"


def _pick(explicit: Optional[str], env_name: str) -> Optional[str]:
    """An explicit value, even an empty one, wins over the environment."""
    if explicit is not None:
        return explicit
    return os.getenv(env_name)


@dataclass
class AdministrationConfig:
    """Endpoints and client credentials for the administration API."""

    auth_server: str = AUTH_SERVER_URL
    host: str = HOST_URL
    client_id: str = ""
    client_secret: str = field(default="", repr=False)  # Never log secret

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            auth_server=os.getenv(ENV_AUTH_SERVER, AUTH_SERVER_URL),
            host=os.getenv(ENV_HOST, HOST_URL),
            client_id=os.getenv(ENV_CLIENT_ID, ""),
            client_secret=os.getenv(ENV_CLIENT_SECRET, ""),
        )

    @classmethod
    def resolve(
        cls,
        auth_server: Optional[str] = None,
        host: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
    ) -> "AdministrationConfig":
        """
        Build a validated configuration.

        Explicit values override environment variables. The endpoint URLs
        fall back to the public defaults when neither source sets them.

        Raises:
            ConfigurationError: If any setting resolves to an empty value
        """
        auth_server_value = _pick(auth_server, ENV_AUTH_SERVER)
        host_value = _pick(host, ENV_HOST)

        cfg = cls(
            auth_server=AUTH_SERVER_URL if auth_server_value is None else auth_server_value,
            host=HOST_URL if host_value is None else host_value,
            client_id=_pick(client_id, ENV_CLIENT_ID) or "",
            client_secret=_pick(client_secret, ENV_CLIENT_SECRET) or "",
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """Raise ConfigurationError listing every empty setting."""
        checks = [
            ("auth_server", self.auth_server, ENV_AUTH_SERVER),
            ("host", self.host, ENV_HOST),
            ("client_id", self.client_id, ENV_CLIENT_ID),
            ("client_secret", self.client_secret, ENV_CLIENT_SECRET),
        ]
        missing = [
            f"{name} (set it explicitly or use the {env} environment variable)"
            for name, value, env in checks
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Missing or empty administration settings: " + ", ".join(missing)
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(level=os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class Config:
    """Main configuration object."""

    administration: AdministrationConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            administration=AdministrationConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
