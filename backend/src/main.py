"""HealthLog Server - Entry point.

Runs the MCP server and a small JSON API over HTTP.
Uses Starlette with the MCP HTTP app mounted at root.
"""

import contextlib
import logging
import os

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .shell.mcp_server import mcp, get_engine, shutdown_engine


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "healthlog"})


async def get_recommendation(request: Request) -> JSONResponse:
    """Return the current recommendation."""
    recommendation, step_count = get_engine().snapshot()
    return JSONResponse({
        "recommendation": recommendation,
        "step_count": step_count,
    })


async def refresh_recommendation(request: Request) -> JSONResponse:
    """Recompute the recommendation, optionally with a fresh step count."""
    body: dict = {}
    if await request.body():
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"error": "Body must be JSON"}, status_code=400)
        if not isinstance(body, dict):
            return JSONResponse({"error": "Body must be a JSON object"}, status_code=400)

    step_count = body.get("step_count")
    if step_count is not None and (isinstance(step_count, bool) or not isinstance(step_count, int)):
        return JSONResponse({"error": "step_count must be an integer"}, status_code=400)
    if step_count is not None and step_count < 0:
        return JSONResponse({"error": "step_count must be non-negative"}, status_code=400)

    engine = get_engine()
    engine.refresh(step_count)
    recommendation, step_count = engine.snapshot()
    return JSONResponse({
        "recommendation": recommendation,
        "step_count": step_count,
    })


# ==================== Create ASGI App ====================


def create_app() -> Starlette:
    """Create the Starlette application with MCP at root.

    The engine's scheduler is started on startup and released on shutdown,
    inside the MCP app's own lifespan.
    """
    mcp_app = mcp.streamable_http_app()

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        async with mcp_app.router.lifespan_context(app):
            get_engine()
            try:
                yield
            finally:
                shutdown_engine()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/recommendation", get_recommendation, methods=["GET"]),
        Route("/recommendation/refresh", refresh_recommendation, methods=["POST"]),
        # Mount MCP app at root - it handles /mcp/ path internally
        Mount("/", app=mcp_app),
    ]

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["http://localhost:5173"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
            ),
        ],
        lifespan=lifespan,
    )

    return app


app = create_app()


def main() -> None:
    """Run the server."""
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "127.0.0.1")

    logger.info("Starting HealthLog server on %s:%d", host, port)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
