"""API route modules."""

from fastapi import FastAPI

from . import config, graph


def register_routes(app: FastAPI):
    """Register all API routers."""
    app.include_router(graph.router, prefix="/api/graph", tags=["graph"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
