"""Shared test helpers."""

import json
from unittest.mock import MagicMock

TOKEN_RESPONSE = {
    "access_token": "test-token",
    "scope": "manage",
    "expires_in": 3600,
    "token_type": "Bearer",
}


def make_response(status=200, json_data=None, body=b""):
    """Build a fake requests.Response."""
    if json_data is not None:
        body = json.dumps(json_data).encode()
    response = MagicMock()
    response.status_code = status
    response.content = body
    response.text = body.decode()
    return response
