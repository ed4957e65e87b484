"""
Credential Manager - client-credentials exchange against the auth server.

A single token is acquired when a client is built and reused for the client's
lifetime. There is no refresh: a caller whose token expires must build a new
client.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from errors import AuthError, ConfigurationError, RequestTimeoutError, TransportError
from transport import DEFAULT_TIMEOUT, SUCCESS_STATUSES

logger = logging.getLogger(__name__)

GRANT_TYPE = "client_credentials"


@dataclass(frozen=True)
class Credential:
    """Token issued by the authorization endpoint."""

    access_token: str = field(repr=False)
    scope: str = ""
    expires_in: int = 0
    token_type: str = ""

    @property
    def authorization(self) -> str:
        """Value of the Authorization header for API calls."""
        return f"Bearer {self.access_token}"


class CredentialManager:
    """Obtains bearer credentials from `{auth_server}/oauth/token`."""

    def __init__(
        self,
        auth_server_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.auth_server_url = auth_server_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def authenticate(self, client_id: str, client_secret: str) -> Credential:
        """
        Exchange client credentials for a bearer token.

        Raises:
            ConfigurationError: If client_id or client_secret is empty
            AuthError: If the endpoint answers outside 200/201/204 or omits the token
            RequestTimeoutError: If the request exceeded the timeout
            TransportError: If the request could not be sent at all
        """
        if not client_id or not client_secret:
            raise ConfigurationError("define client_id and client_secret")

        url = f"{self.auth_server_url}/oauth/token"
        payload = {
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": GRANT_TYPE,
        }

        logger.debug(f"POST {url}")
        try:
            response = self.session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"POST {url} timed out after {self.timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"POST {url} failed: {e}") from e

        if response.status_code not in SUCCESS_STATUSES:
            raise AuthError(response.status_code, response.text)

        try:
            data = json.loads(response.content)
        except ValueError as e:
            raise AuthError(
                response.status_code,
                response.text,
                "authentication response is not valid JSON",
            ) from e

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise AuthError(
                response.status_code,
                response.text,
                "authentication response did not include an access token",
            )

        credential = Credential(
            access_token=access_token,
            scope=data.get("scope", ""),
            expires_in=data.get("expires_in", 0),
            token_type=data.get("token_type", ""),
        )
        logger.info(
            f"Authenticated client {client_id} "
            f"(scope={credential.scope!r}, expires_in={credential.expires_in}s)"
        )
        return credential
