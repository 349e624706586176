"""
Keep-alive web server.
Exposes health endpoints for hosting platforms that ping the process.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from utils.error_handler import get_error_handler
from utils.logger import get_logger

logger = get_logger("KeepAlive")

VERSION = "1.0.0"

# Track bot status
_bot_status: Dict[str, Any] = {
    "status": "starting",
    "discord_connected": False,
    "commands_registered": False,
    "registration_mode": None,
    "commands_loaded": 0,
}


def update_bot_status(**kwargs: Any) -> None:
    """Update bot status for health endpoint."""
    _bot_status.update(kwargs)


def get_bot_status() -> Dict[str, Any]:
    return dict(_bot_status)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    logger.info("Keep-alive server starting...")
    yield
    logger.info("Keep-alive server shutting down...")


app = FastAPI(
    title="Muse Bot",
    description="Music bot keep-alive server",
    version=VERSION,
    lifespan=lifespan,
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Muse Bot",
        "version": VERSION,
        "status": _bot_status.get("status", "unknown"),
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring."""
    healthy = bool(_bot_status.get("discord_connected") and _bot_status.get("commands_registered"))

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "discord": "connected" if _bot_status.get("discord_connected") else "disconnected",
            "commands_registered": bool(_bot_status.get("commands_registered")),
            "registration_mode": _bot_status.get("registration_mode"),
            "commands_loaded": _bot_status.get("commands_loaded", 0),
            "routing_faults": get_error_handler().fault_count(),
        },
    )


@app.get("/ping")
async def ping():
    """Simple ping endpoint."""
    return {"pong": True}


async def start_server(host: str, port: int) -> None:
    """Start the keep-alive server."""
    import uvicorn

    config_uvicorn = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config_uvicorn)

    logger.info(f"Keep-alive server listening on port {port}")
    await server.serve()
