from typing import Iterable, Optional

from langgraph.graph import StateGraph, END

from relay.config import RelaySettings
from relay.state import RelayState, UploadedPayload
from relay.nodes import (
    node_check_config,
    node_check_file,
    node_upload,
    node_execute,
)


def stop_on_error(next_node: str):
    """Router factory: go to `next_node` unless a previous node failed."""

    def route(state: RelayState) -> str:
        return END if state.get("error") else next_node

    route.__name__ = f"continue_to_{next_node}"
    return route


def build_graph():
    workflow = StateGraph(RelayState)

    workflow.add_node("check_config", node_check_config)
    workflow.add_node("check_file", node_check_file)
    workflow.add_node("upload", node_upload)
    workflow.add_node("execute", node_execute)

    workflow.set_entry_point("check_config")

    # Every stage either hands over to the next one or ends the run
    for node, next_node in (
        ("check_config", "check_file"),
        ("check_file", "upload"),
        ("upload", "execute"),
    ):
        workflow.add_conditional_edges(
            node,
            stop_on_error(next_node),
            {next_node: next_node, END: END},
        )

    workflow.add_edge("execute", END)

    return workflow.compile()


pipeline = build_graph()


def initial_state(
    settings: RelaySettings, payloads: Optional[Iterable[UploadedPayload]] = None
) -> RelayState:
    return {
        "settings": settings,
        "payloads": list(payloads or []),
        "file_id": None,
        "result": None,
        "error": None,
        "stage": "received",
    }


def analyze_face(payloads: Iterable[UploadedPayload], settings: RelaySettings) -> RelayState:
    """
    Run the full relay chain for one request.

    The returned state holds either `result` (the workflow response) or
    `error` (a RelayError), never both.
    """
    return pipeline.invoke(initial_state(settings, payloads))
