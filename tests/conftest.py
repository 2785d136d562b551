from __future__ import annotations

import json

import pytest
import requests

from relay.config import RelaySettings

BASE_URL = "https://dify.test/v1"


def _response(status_code, body=None, text=""):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = BASE_URL
    resp.encoding = "utf-8"
    if body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = text.encode("utf-8")
    return resp


@pytest.fixture
def make_response():
    """Builds a real `requests.Response` without touching the network."""
    return _response


@pytest.fixture
def settings():
    return RelaySettings(
        base_url=BASE_URL,
        api_key="app-secret",
        workflow_id="wf-1",
        timeout=5.0,
    )


@pytest.fixture
def anyio_backend():
    return "asyncio"
