from __future__ import annotations

import logging
from typing import Any, Dict

from relay.errors import BadRequestError, ConfigurationError, RelayError
from relay.state import RelayState
from relay.tools import run_workflow, upload_file

log = logging.getLogger(__name__)


def _fail(tag: str, err: RelayError) -> Dict[str, Any]:
    log.error("[%s] %s (status=%s, details=%s)", tag, err, err.status_code, err.details)
    return {"error": err, "stage": "errored"}


def node_check_config(state: RelayState) -> Dict[str, Any]:
    """Stops the chain before any outbound call if settings are incomplete."""
    settings = state.get("settings")
    missing = settings.missing() if settings else ["settings"]
    if missing:
        return _fail("CONFIG", ConfigurationError(reason=f"missing {', '.join(missing)}"))
    return {"stage": "config_checked"}


def node_check_file(state: RelayState) -> Dict[str, Any]:
    """Requires exactly one uploaded file."""
    payloads = state.get("payloads") or []

    if not payloads:
        return _fail("FILE", BadRequestError())
    if len(payloads) > 1:
        return _fail("FILE", BadRequestError(f"Only one file may be uploaded, got {len(payloads)}"))

    payload = payloads[0]
    log.info("[FILE] %s (%s, %d bytes)", payload.filename, payload.content_type, len(payload.content))
    return {"stage": "file_checked"}


def node_upload(state: RelayState) -> Dict[str, Any]:
    """Node wrapper around the Dify upload tool."""
    settings = state["settings"]
    payload = state["payloads"][0]
    log.info("[UPLOAD] uploading %s to Dify", payload.filename)

    try:
        result = upload_file.invoke(
            {
                "base_url": settings.base_url,
                "api_key": settings.api_key,
                "payload": payload,
                "timeout": settings.timeout,
            }
        )
    except RelayError as e:
        return _fail("UPLOAD", e)

    log.info("[UPLOAD] file id=%s", result["file_id"])
    return {"file_id": result["file_id"], "stage": "uploaded"}


def node_execute(state: RelayState) -> Dict[str, Any]:
    """Node wrapper around the blocking workflow run."""
    settings = state["settings"]
    log.info("[EXECUTE] workflow %s with file %s", settings.workflow_id, state["file_id"])

    try:
        result = run_workflow.invoke(
            {
                "base_url": settings.base_url,
                "api_key": settings.api_key,
                "workflow_id": settings.workflow_id,
                "file_id": state["file_id"],
                "timeout": settings.timeout,
            }
        )
    except RelayError as e:
        return _fail("EXECUTE", e)

    log.info("[EXECUTE] workflow finished")
    return {"result": result["result"], "stage": "completed"}
