from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from toolagents.server.app_core import ToolAgentApp
from toolagents.utils import utc_now_iso

import logging

# ============================================================
# LOGGING
# ============================================================

logger = logging.getLogger("toolagents.server")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


# ============================================================
# CORS
# ============================================================

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Error bodies for routing failures, keyed by HTTP status
ROUTING_ERRORS = {
    404: ("Not Found", "Endpoint not found"),
    405: ("Method Not Allowed", "Method not allowed for this endpoint"),
}


# ============================================================
# FastAPI App
# ============================================================

def create_app(agent_app: ToolAgentApp) -> FastAPI:
    """
    HTTP transport for one tool agent.

    Routes
    ------
    GET  /health   liveness plus agent stats
    POST /mcp      JSON-RPC 2.0 endpoint
    OPTIONS *      CORS preflight, always 200 with an empty body
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        agent_app.start()
        logger.info("[SERVER] %s started", agent_app.agent.name)
        try:
            yield
        finally:
            agent_app.stop()
            logger.info("[SERVER] %s stopped", agent_app.agent.name)

    app = FastAPI(
        title=agent_app.agent.name,
        version=agent_app.agent.version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # ------------------------------------------------------------
    # Middleware
    # ------------------------------------------------------------

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers.update(CORS_HEADERS)
        return response

    # ------------------------------------------------------------
    # Routing errors
    # ------------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        error, message = ROUTING_ERRORS.get(exc.status_code, ("Error", str(exc.detail)))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error, "message": message, "timestamp": utc_now_iso()},
        )

    # ------------------------------------------------------------
    # Health
    # ------------------------------------------------------------

    @app.get("/health")
    def health():
        try:
            payload = agent_app.health()
        except Exception as e:
            logger.exception("[HEALTH] Stats collection failed")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "error": str(e), "timestamp": utc_now_iso()},
            )

        payload["timestamp"] = utc_now_iso()
        return payload

    # ------------------------------------------------------------
    # JSON-RPC
    # ------------------------------------------------------------

    @app.post("/mcp")
    async def mcp(request: Request):
        body = await request.body()
        result = await run_in_threadpool(agent_app.handle_rpc, body)
        return JSONResponse(content=result)

    return app
