import logging
import secrets
from typing import Optional

import requests
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from kb_dashboard.environment import Environment
from kb_dashboard.middleware.dashboard import build_dashboard_view
from kb_dashboard.templates import INDEX_TEMPLATE, TemplateRenderer

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PARAM = "access_token"
# Paths served without an access token
PUBLIC_PATHS = {"/healthz"}


def is_authorized(provided: Optional[str], expected: str) -> bool:
    """Exact, case-sensitive match of the request's token against the configured one."""
    return secrets.compare_digest((provided or "").encode("utf-8"), expected.encode("utf-8"))


def create_app(env: Environment, renderer: Optional[TemplateRenderer] = None) -> FastAPI:
    if renderer is None:
        renderer = TemplateRenderer(debug=env.debug)

    app = FastAPI(
        title="Knowledge Base Dashboard",
        version="0.1.0",
        debug=env.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.env = env
    app.state.renderer = renderer

    @app.middleware("http")
    async def check_access_token(request: Request, call_next):
        if request.url.path not in PUBLIC_PATHS and \
                not is_authorized(request.query_params.get(ACCESS_TOKEN_PARAM), env.access_token):
            logger.info(f"Rejected request to {request.url.path}: invalid access_token")
            return PlainTextResponse("invalid access_token", status_code=403)
        return await call_next(request)

    @app.exception_handler(requests.exceptions.RequestException)
    def _upstream_error(request: Request, exc: requests.exceptions.RequestException) -> PlainTextResponse:
        logger.error(f"Failed to load dashboard from {env.cluster.endpoint}: {type(exc).__name__} {exc}")
        return PlainTextResponse("failed to load dashboard", status_code=502)

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        view = build_dashboard_view(env.cluster, env.dashboard)
        return HTMLResponse(renderer.render(INDEX_TEMPLATE, view=view))

    return app
