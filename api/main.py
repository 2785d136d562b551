from __future__ import annotations

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from api.schemas import ErrorResponse, HealthResponse
from relay.config import RelaySettings
from relay.graph import analyze_face, pipeline
from relay.state import UploadedPayload

# Load .env from the project root before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

ANALYZE_PATHS = ("/api/analyzeFace", "/analyzeFace")

# The form is parsed by hand so configuration is checked before the file
MULTIPART_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {"file": {"type": "string", "format": "binary"}},
                    "required": ["file"],
                }
            }
        },
    }
}

router = APIRouter()


async def read_payloads(request: Request) -> List[UploadedPayload]:
    """Collects every file sent under the `file` form field."""
    form = await request.form()
    try:
        payloads = []
        for value in form.getlist("file"):
            if not isinstance(value, UploadFile):
                continue
            payloads.append(
                UploadedPayload(
                    content=await value.read(),
                    filename=value.filename,
                    content_type=value.content_type,
                )
            )
        return payloads
    finally:
        await form.close()


async def analyze(request: Request):
    """
    Upload the image to Dify, run the workflow and return its result as-is.
    """
    log.info("Received a new request to %s", request.url.path)
    settings: RelaySettings = request.app.state.settings

    # An unconfigured relay answers 500 whatever the body holds
    payloads = await read_payloads(request) if settings.is_complete() else []

    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(
        request.app.state.executor, analyze_face, payloads, settings
    )

    error = result.get("error")
    if error is not None:
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    log.info("Workflow executed successfully. Returning result to client.")
    return JSONResponse(status_code=200, content=result["result"])


for path in ANALYZE_PATHS:
    router.add_api_route(
        path,
        analyze,
        methods=["POST"],
        name=f"analyze_face{path.replace('/', '_')}",
        responses={
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
        openapi_extra=MULTIPART_BODY,
    )


@router.get("/graph/ascii")
def graph_ascii():
    """
    Return an ASCII representation of the relay graph.
    """
    return {"graph": pipeline.get_graph().draw_ascii()}


@router.get("/graph/mermaid")
def graph_mermaid():
    """
    Return Mermaid source for visualizing the relay graph.
    """
    return {"mermaid": pipeline.get_graph().draw_mermaid()}


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    """
    Basic health check.
    """
    return HealthResponse(status="ok", configured=request.app.state.settings.is_complete())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: RelaySettings = app.state.settings
    if settings.is_complete():
        log.info("Relay configured for %s, workflow %s", settings.base_url, settings.workflow_id)
    else:
        log.warning(
            "Missing configuration: %s. Every request will fail until it is set.",
            ", ".join(settings.missing()),
        )
    log.info("Ready to receive requests at %s", ANALYZE_PATHS[0])
    yield

    app.state.executor.shutdown(wait=False)


def create_app(settings: Optional[RelaySettings] = None) -> FastAPI:
    app = FastAPI(
        title="Face Analysis Relay",
        version="1.0.0",
        description="Forwards uploaded images to a Dify workflow and relays the result.",
        lifespan=lifespan,
    )
    app.state.settings = settings if settings is not None else RelaySettings.from_env()
    # Sized for blocking I/O: one thread per in-flight relay chain
    app.state.executor = ThreadPoolExecutor(
        max_workers=app.state.settings.max_concurrency,
        thread_name_prefix="relay",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    return app


app = create_app()
