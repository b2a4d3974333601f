"""FastAPI host binding for show-more widgets."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

from showmore.core.config import load_config
from showmore.core.exceptions import ShowMoreError
from showmore.core.models import AppConfig
from showmore.delivery.templates import render_more, render_page
from showmore.widget.controller import ToggleController

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None, controller: Optional[ToggleController] = None,
) -> FastAPI:
    app = FastAPI(title="Show More", docs_url=None, redoc_url=None)

    cfg = config or load_config()
    app.state.config = cfg
    app.state.controller = controller or ToggleController(defaults=cfg.more)

    @app.exception_handler(ShowMoreError)
    async def showmore_error_handler(request: Request, exc: ShowMoreError):
        return JSONResponse(status_code=400, content={"error": exc.message, "code": exc.error_code})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"error": "Invalid options", "detail": exc.errors(include_url=False, include_context=False)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok", "instances": len(app.state.controller.registry)}

    # Standalone preview of one instance
    @app.get("/preview/{handle}", response_class=HTMLResponse)
    def preview(handle: str):
        view = app.state.controller.render(handle)
        if view is None:
            return HTMLResponse("Not found", status_code=404)
        return HTMLResponse(render_page(render_more(view), title=handle))

    # Import routes here to avoid circular imports at module level
    from showmore.web.routes import instances, truncate

    app.include_router(truncate.router)
    app.include_router(instances.router, prefix="/instances")

    return app
