#!/usr/bin/env python3
"""
Server launcher for the face analysis relay.

Reads PORT from the environment (or .env), defaulting to 8080.
"""

import logging

import uvicorn

from api.main import app

log = logging.getLogger(__name__)

if __name__ == "__main__":
    port = app.state.settings.port
    log.info("Server is running and listening on port %s", port)

    uvicorn.run(
        app,
        host="0.0.0.0",  # Accept connections from any IP
        port=port,
        log_level="info",
    )
