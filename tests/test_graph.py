from __future__ import annotations

from unittest.mock import patch

from relay.config import RelaySettings
from relay.errors import ConfigurationError, UpstreamError
from relay.graph import analyze_face, pipeline
from relay.state import UploadedPayload

FACE = UploadedPayload(content=b"img", filename="face.jpg", content_type="image/jpeg")


@patch("relay.nodes.run_workflow")
@patch("relay.nodes.upload_file")
def test_full_chain(mock_upload, mock_run, settings):
    mock_upload.invoke.return_value = {"file_id": "abc123"}
    mock_run.invoke.return_value = {"result": {"answer": "ok"}}

    state = analyze_face([FACE], settings)

    assert state["stage"] == "completed"
    assert state["error"] is None
    assert state["file_id"] == "abc123"
    assert state["result"] == {"answer": "ok"}


@patch("relay.nodes.run_workflow")
@patch("relay.nodes.upload_file")
def test_upload_failure_skips_workflow(mock_upload, mock_run, settings):
    mock_upload.invoke.side_effect = UpstreamError(413, {"msg": "too large"})

    state = analyze_face([FACE], settings)

    assert state["stage"] == "errored"
    assert state["error"].status_code == 413
    assert state["result"] is None
    mock_run.invoke.assert_not_called()


@patch("relay.nodes.run_workflow")
@patch("relay.nodes.upload_file")
def test_config_checked_before_file(mock_upload, mock_run):
    state = analyze_face([], RelaySettings())

    assert isinstance(state["error"], ConfigurationError)
    mock_upload.invoke.assert_not_called()
    mock_run.invoke.assert_not_called()


def test_graph_lists_every_stage():
    mermaid = pipeline.get_graph().draw_mermaid()
    for node in ("check_config", "check_file", "upload", "execute"):
        assert node in mermaid
