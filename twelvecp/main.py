"""
This module creates and configures the main FastAPI application for the
AESO 12CP Savings Analytics API. It serves 12 Coincident Peak price analytics
and transmission savings simulations for large flexible loads on the
Alberta power pool.

Tags:
    - fastapi
    - 12cp
    - electricity-prices
    - data-analysis
    - rest-api

Features:
    - Monthly average vs. peak-hour price comparison
    - 24-hour peak risk profile and seasonal insights
    - Facility savings simulation for peak avoidance strategies
    - Historical demand peak browsing
    - Swagger documentation at /docs

API Categories:
    - System Information: Health and API metadata
    - 12CP Analytics: Analysis, simulation and notices

Version: 1.0.0
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .controllers import analytics_controller
from .config import app_config


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance ready for deployment.

    Routes:
        - /docs: Interactive Swagger UI documentation
        - /redoc: Alternative ReDoc documentation
        - /api/*: All 12CP analytics endpoints
    """

    app = FastAPI(
        title=app_config.api.title,
        description=app_config.api.description,
        version=app_config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health, version info, and system status endpoints"
            },
            {
                "name": "12CP Analytics",
                "description": "12 Coincident Peak price analysis, savings simulation and notices"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.allow_origins,
        allow_credentials=app_config.api.allow_credentials,
        allow_methods=app_config.api.allow_methods,
        allow_headers=app_config.api.allow_headers,
    )

    app.include_router(
        analytics_controller.router,
        prefix="/api",
    )

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=app_config.api.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(
        app,
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload
    )
