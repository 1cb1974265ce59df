"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hilbertplot import __version__
from hilbertplot.config import settings
from hilbertplot.engine.pipeline import register_analyses
from hilbertplot.errors import HilbertPlotError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.hilbertplot_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="HilbertPlot",
        description="Hilbert-family space-filling curves and locality-preserving data plots",
        version=__version__,
        debug=settings.hilbertplot_env == "development",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all analysis modules to trigger registration
    register_analyses()

    @app.exception_handler(HilbertPlotError)
    async def _engine_error(request: Request, exc: HilbertPlotError) -> JSONResponse:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    from hilbertplot.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
