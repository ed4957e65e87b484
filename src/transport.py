"""
Transport Gateway - authenticated JSON requests against the administration API.

Every request carries the bearer credential and a JSON content type, is
bounded by a fixed timeout and is classified by status code. Nothing is
retried: failures propagate to the caller as they happen.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Optional

import requests

from errors import NotFoundError, RemoteError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10  # seconds
SUCCESS_STATUSES = (200, 201, 204)


def _json_default(obj: Any) -> Any:
    """JSON serializer for objects not handled by default json encoder."""
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_json(payload: Any) -> str:
    """Encode a request payload, rendering Decimal values as JSON numbers."""
    return json.dumps(payload, default=_json_default)


def decode_json(body: bytes) -> Any:
    """Decode a response body, keeping JSON fractions as Decimal."""
    return json.loads(body, parse_float=Decimal)


class TransportGateway:
    """
    Sends requests to the administration API host.

    The bearer token is set once at construction and only read afterwards,
    so one gateway can serve concurrent calls for independent resources.
    """

    def __init__(
        self,
        host_url: str,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.host_url = host_url.rstrip("/")
        self._token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_headers(self) -> dict:
        return {
            "Authorization": self._token,
            "Content-Type": "application/json",
        }

    def send(self, method: str, path: str, body: Any = None) -> bytes:
        """
        Perform one request and return the raw response body.

        Args:
            method: HTTP method
            path: Path below the API host, starting with '/'
            body: Optional JSON-serializable payload

        Returns:
            The response body bytes (possibly empty)

        Raises:
            RequestTimeoutError: If the request exceeded the timeout
            NotFoundError: If the API answered 404
            RemoteError: For any other status outside 200/201/204
            TransportError: If the request could not be sent at all
        """
        url = f"{self.host_url}{path}"
        data = encode_json(body) if body is not None else None

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers=self._get_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"{method} {url} timed out after {self.timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        if response.status_code not in SUCCESS_STATUSES:
            if response.status_code == 404:
                raise NotFoundError(response.status_code, response.text)
            raise RemoteError(response.status_code, response.text)

        return response.content
