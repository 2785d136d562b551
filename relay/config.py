from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

log = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 300.0
# Requests relayed at once; each holds a worker thread for the whole chain
DEFAULT_MAX_CONCURRENCY = 64

# Required settings: attribute name -> environment variable
REQUIRED_ENV = {
    "base_url": "DIFY_API_URL",
    "api_key": "DIFY_API_KEY",
    "workflow_id": "DIFY_WORKFLOW_ID",
}


def _clean_env(env: Mapping[str, str], name: str, default: str = "") -> str:
    value = env.get(name, default) or ""
    return value.strip().strip('"').strip("'")


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = _clean_env(env, name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class RelaySettings:
    """
    Dify connection settings, read once at startup.

    `base_url` is the API root, e.g. https://api.dify.ai/v1.
    """

    base_url: str = ""
    api_key: str = ""
    workflow_id: str = ""
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self):
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/"))

    def missing(self) -> List[str]:
        return [env for attr, env in REQUIRED_ENV.items() if not getattr(self, attr)]

    def is_complete(self) -> bool:
        return not self.missing()

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RelaySettings":
        env = os.environ if env is None else env
        return cls(
            base_url=_clean_env(env, "DIFY_API_URL"),
            api_key=_clean_env(env, "DIFY_API_KEY"),
            workflow_id=_clean_env(env, "DIFY_WORKFLOW_ID"),
            port=_number(env, "PORT", DEFAULT_PORT, int),
            timeout=_number(env, "RELAY_TIMEOUT", DEFAULT_TIMEOUT, float),
            max_concurrency=max(1, _number(env, "RELAY_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY, int)),
        )
