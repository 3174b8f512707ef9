"""FastAPI application exposing the Clusters MCP tools over HTTP."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from clusters_mcp import mcp
from clusters_mcp.clusters_api import default_client
from clusters_mcp.config import default_config
from clusters_mcp.logging_config import configure_logging
from clusters_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)
configure_logging(default_config)

HEALTH_STATUS = {"status": "ok"}
APP_VERSION = mcp.MCP_SERVER_VERSION


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    if not default_config.api_key:
        logger.warning("CLUSTERS_API_KEY is not set; requests will carry an empty X-API-KEY header")
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="Clusters MCP Server",
    description="Clusters wallet and name registry tools for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    JSON-RPC gateway for MCP clients.

    Malformed JSON and non-object bodies are answered with HTTP 400; every other
    outcome, including JSON-RPC errors, uses HTTP 200. Notifications get 204.
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    try:
        body = await request.json()
    except ValueError:
        payload = mcp.jsonrpc_error(None, mcp.PARSE_ERROR, "Parse error")
        return JSONResponse(status_code=400, content=payload)

    payload = await mcp.handle_jsonrpc(body, request_id=request_id)
    duration_ms = (time.time() - start_time) * 1000
    method_label = body.get("method") if isinstance(body, dict) else None
    if payload is None:
        logger.debug(
            "mcp outcome=notification method=%s duration_ms=%.2f",
            method_label,
            duration_ms,
            extra={"request_id": request_id},
        )
        return Response(status_code=204)

    error = payload.get("error")
    logger.debug(
        "mcp outcome=%s method=%s id=%s duration_ms=%.2f error_code=%s",
        "error" if error else "success",
        method_label,
        payload.get("id"),
        duration_ms,
        error.get("code") if error else None,
        extra={"request_id": request_id},
    )
    status_code = 400 if not isinstance(body, dict) else 200
    return JSONResponse(status_code=status_code, content=payload)


# Run with: uvicorn clusters_mcp.server:app --reload
