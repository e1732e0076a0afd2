"""
Monit Collector: HTTP Server
============================

Poses as the M/Monit collector. Monit is pointed at it with
`set mmonit http://<host>:<port>/collector`.

Endpoints:
- POST /collector  -> raw XML notification (path configurable)
- GET  /health     -> liveness

Usage:
    python run_server.py
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from ..collector.service import CollectResponse, Collector

logger = logging.getLogger(__name__)


def create_app(collector: Collector) -> FastAPI:
    """
    Build an app serving `collector` at its configured route.

    Each call returns an independent app, so several collectors (each with
    its own queue) can live in one process.
    """
    config = collector.config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Collector listening on %s (queue capacity %d, publish timeout %.1fs)",
            config.route_path, config.queue_capacity, config.publish_timeout_seconds
        )
        yield
        logger.info("Collector shutting down")

    app = FastAPI(
        title="Monit Collector",
        version="0.1.0",
        description="Receives Monit status and event notifications",
        lifespan=lifespan
    )

    @app.get("/health")
    async def health_check():
        """System status."""
        return {"status": "online", "queued": collector.handoff.qsize()}

    app.add_api_route(
        config.route_path,
        collector.endpoint,
        methods=["POST"],
        response_model=CollectResponse,
    )

    return app
