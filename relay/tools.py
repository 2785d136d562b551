from __future__ import annotations

from typing import Any, Dict

import requests
from langchain_core.tools import tool

from relay.errors import TransportError, UpstreamError
from relay.state import UploadedPayload

# Must match the variable name on the workflow's Start node.
INPUT_KEY = "shuru"
USER_TAG = "wechat-miniprogram-user"


def _auth(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def _post(url: str, timeout: float, **kwargs) -> requests.Response:
    try:
        return requests.post(url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        raise TransportError(f"POST {url} failed: {e}") from e


def _json_body(resp: requests.Response) -> Any:
    """
    Returns the decoded body of a successful response, raising on failure.

    Non-2xx answers keep the upstream status and body; a 2xx answer that is
    not JSON counts as a transport failure.
    """
    if not 200 <= resp.status_code < 300:
        try:
            details = resp.json()
        except ValueError:
            details = resp.text
        raise UpstreamError(resp.status_code, details, reason=f"{resp.url} returned {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise TransportError(f"Malformed JSON from {resp.url}: {e}") from e


@tool
def upload_file(
    base_url: str,
    api_key: str,
    payload: UploadedPayload,
    timeout: float = 300.0,
) -> Dict[str, Any]:
    """
    Uploads an image to the Dify file store.

    Args:
        base_url: Dify API root, e.g. https://api.dify.ai/v1.
        api_key: Dify app key, sent as a bearer token.
        payload: The client's file, passed by reference so the bytes stay out
            of the tool's logged input.
        timeout: Seconds to wait for the response.

    Returns:
        Dict with key:
            - file_id : id of the stored file
    """
    file_part = (payload.filename or "upload", payload.content)
    if payload.content_type:
        file_part += (payload.content_type,)

    resp = _post(
        f"{base_url}/files/upload",
        timeout,
        headers=_auth(api_key),
        files={"file": file_part},
        data={"user": USER_TAG},
    )
    body = _json_body(resp)

    file_id = body.get("id") if isinstance(body, dict) else None
    if not file_id:
        raise TransportError(f"Upload response has no file id: {body!r}")

    return {"file_id": str(file_id)}


@tool
def run_workflow(
    base_url: str,
    api_key: str,
    workflow_id: str,
    file_id: str,
    timeout: float = 300.0,
) -> Dict[str, Any]:
    """
    Runs a Dify workflow in blocking mode on a previously uploaded image.

    Returns:
        Dict with key:
            - result : the workflow response body, untouched
    """
    payload = {
        "inputs": {
            INPUT_KEY: {
                "upload_file_id": file_id,
                "type": "image",
                "transfer_method": "remote_url",
            }
        },
        "response_mode": "blocking",
        "user": USER_TAG,
    }

    resp = _post(
        f"{base_url}/workflows/{workflow_id}/run",
        timeout,
        headers={**_auth(api_key), "Content-Type": "application/json"},
        json=payload,
    )
    return {"result": _json_body(resp)}
