"""FastAPI server exposing the estimator over HTTP.

Stateless: each request carries a partial configuration that is merged over
the defaults, validated and computed.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import click
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from agentcost import __version__
from agentcost.config.loader import (
    configuration_from_dict,
    configuration_to_dict,
    default_configuration,
)
from agentcost.engine.calculator import compute
from agentcost.errors import ConfigurationError
from agentcost.validation.validator import ValidationResult, Validator

logger = logging.getLogger(__name__)

app = FastAPI(
    title="agentcost API",
    version=__version__,
    description="LLM-agent vs. human development cost estimator",
)

_start_time = time.monotonic()
_validator = Validator()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception on %s %s: %s", request.method, request.url.path, exc
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def _issues(issues: list[ValidationResult]) -> list[dict[str, Any]]:
    return [{"field": i.field, "action": i.action, "violation": i.violation} for i in issues]


@app.get("/api/health")
async def health() -> dict[str, Any]:
    """Health check."""
    uptime = time.monotonic() - _start_time
    return {"status": "ok", "version": __version__, "uptime_seconds": round(uptime, 1)}


@app.get("/api/defaults")
async def defaults() -> dict[str, Any]:
    """Default configuration."""
    return configuration_to_dict(default_configuration())


@app.post("/api/validate")
async def validate(request: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial configuration."""
    try:
        config = configuration_from_dict(request)
    except ConfigurationError as e:
        return {"valid": False, "error": str(e), "violations": e.violations}

    issues = _validator.check_all(config)
    return {"valid": all(i.passed for i in issues), "issues": _issues(issues)}


@app.post("/api/estimate")
async def estimate(request: dict[str, Any]) -> dict[str, Any]:
    """Estimate cost and duration for a partial configuration."""
    try:
        config = configuration_from_dict(request)
        warnings = _validator.ensure_valid(config)
    except ConfigurationError as e:
        return {"error": str(e), "violations": e.violations}

    return {"results": compute(config).to_dict(), "warnings": _issues(warnings)}


@click.command()
@click.option("--port", default=3850, help="Port to listen on")
@click.option("--host", default="127.0.0.1", help="Host to bind to")
def main(port: int, host: str) -> None:
    """Start the agentcost API server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)
