from dataclasses import dataclass, field
from typing import Any, List, Optional, TypedDict

from relay.config import RelaySettings
from relay.errors import RelayError


@dataclass(frozen=True)
class UploadedPayload:
    """One file received from the client, kept in memory only."""

    content: bytes = field(repr=False)
    filename: Optional[str] = None
    content_type: Optional[str] = None


class RelayState(TypedDict, total=False):
    """
    Per-request state passed between LangGraph nodes.

    Either `result` or `error` is set once the graph finishes, never both.
    """

    settings: RelaySettings
    payloads: List[UploadedPayload]  # everything the client sent under `file`

    # Output of the upload step
    file_id: Optional[str]

    # Output of the workflow step, passed through untouched
    result: Optional[Any]

    error: Optional[RelayError]
    stage: str  # received | config_checked | file_checked | uploaded | completed | errored
