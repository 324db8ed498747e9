import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn import Config, Server

from .routers import incidents, notifications, routes, scheduler, zones
from ..errors import ResponseCoreError
from ..service_manager.base_service import BaseService

logger = logging.getLogger("response-core.api-gateway")

ERROR_STATUS = {
    "validation_error": 422,
    "network_error": 503,
    "route_unavailable": 502,
    "state_conflict": 409,
    "persistence_error": 500,
    "not_found": 404,
}


async def core_error_handler(request: Request, exc: ResponseCoreError):
    status_code = ERROR_STATUS.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


def create_app(core) -> FastAPI:
    """Build the HTTP surface over an assembled ``ResponseCore``."""
    app = FastAPI(title="MDRRMO Response Core API", version="1.0.0")
    app.state.core = core

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ResponseCoreError, core_error_handler)

    app.include_router(zones.router, prefix="/api/v1/zones", tags=["Zones"])
    app.include_router(routes.router, prefix="/api/v1/routes", tags=["Routes"])
    app.include_router(incidents.router, prefix="/api/v1/incidents", tags=["Incidents"])
    app.include_router(notifications.router, prefix="/api/v1/notifications", tags=["Notifications"])
    app.include_router(scheduler.router, prefix="/api/v1/scheduler", tags=["Scheduler"])

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "components": {
                "zones": len(core.catalog),
                "scheduler": "running" if core.scheduler.running else "stopped",
            },
        }

    return app


class APIGatewayService(BaseService):
    """
    API Gateway Service.
    Responsibility: Expose the response core over REST for the admin console.
    """

    def __init__(self, core, host: str = "0.0.0.0", port: int = 8000):
        super().__init__("APIGatewayService")
        self.app = create_app(core)
        self.host = host
        self.port = port
        self._server: Optional[Server] = None
        self._serve_task: Optional[asyncio.Task] = None

    async def start(self):
        logger.info(f"APIGatewayService starting on {self.host}:{self.port}")
        config = Config(app=self.app, host=self.host, port=self.port, log_level="info")
        self._server = Server(config)
        self._serve_task = asyncio.create_task(self._server.serve())
        self._running = True

    async def stop(self):
        self._running = False
        if self._server:
            self._server.should_exit = True
        if self._serve_task:
            await self._serve_task
            self._serve_task = None
        logger.info("APIGatewayService stopped.")
