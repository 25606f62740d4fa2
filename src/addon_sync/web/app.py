"""aiohttp application serving the sync page and its JSON API."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Type

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..api_clients.stremio import StremioAPIClient
from ..config.settings import AppSettings, get_settings
from ..core.controller import SyncController
from ..core.models import UploadedFile
from ..utils.logging import get_logger
from .sessions import SessionStore


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

SETTINGS_KEY = web.AppKey("settings", AppSettings)
CLIENT_KEY = web.AppKey("client", object)
SESSIONS_KEY = web.AppKey("sessions", SessionStore)
TEMPLATES_KEY = web.AppKey("templates", Environment)
STARTED_AT_KEY = web.AppKey("started_at", datetime)

CONTROLLER_REQUEST_KEY = "controller"

logger = get_logger(__name__)


def _build_templates() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def api_error(exc_class: Type[web.HTTPException], code: str, message: str) -> web.HTTPException:
    """Build an HTTP error whose body is ``{"error": {"code", "message"}}``."""
    payload = {"error": {"code": code, "message": message}}
    return exc_class(text=json.dumps(payload), content_type="application/json")


@web.middleware
async def session_middleware(request: web.Request, handler):
    """Attach the browser's sync controller to the request."""
    app = request.app
    cookie_name = app[SETTINGS_KEY].web.session_cookie

    session_id, controller, created = app[SESSIONS_KEY].get_or_create(
        request.cookies.get(cookie_name)
    )
    request[CONTROLLER_REQUEST_KEY] = controller

    try:
        response = await handler(request)
    except web.HTTPException as e:
        if created:
            e.set_cookie(cookie_name, session_id, httponly=True, samesite="Strict")
        raise

    if created:
        response.set_cookie(cookie_name, session_id, httponly=True, samesite="Strict")
    return response


def _controller(request: web.Request) -> SyncController:
    return request[CONTROLLER_REQUEST_KEY]


async def index_handler(request: web.Request) -> web.Response:
    """Render the sync page with the session's current state."""
    settings = request.app[SETTINGS_KEY]
    template = request.app[TEMPLATES_KEY].get_template("index.html")

    html = template.render(
        app_name=settings.name,
        state=_controller(request).snapshot(),
        accept=",".join([".json"] + settings.addon_file.accepted_content_types),
    )
    return web.Response(text=html, content_type="text/html")


async def state_handler(request: web.Request) -> web.Response:
    return web.json_response(_controller(request).snapshot())


async def upload_handler(request: web.Request) -> web.Response:
    """Load an addon file posted as multipart field ``file``."""
    data = await request.post()
    field = data.get("file")
    if not isinstance(field, web.FileField):
        raise api_error(web.HTTPBadRequest, "NO_FILE", "No file provided")

    uploaded = UploadedFile(
        name=field.filename,
        content_type=field.content_type,
        content=field.file.read(),
    )

    controller = _controller(request)
    controller.load_file(uploaded)
    return web.json_response(controller.snapshot())


async def sync_handler(request: web.Request) -> web.Response:
    """Sync the session's addons using the auth key in the JSON body."""
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        raise api_error(web.HTTPBadRequest, "INVALID_REQUEST", "Request body must be a JSON object")

    controller = _controller(request)
    if controller.state.is_loading:
        raise api_error(web.HTTPConflict, "SYNC_IN_PROGRESS", "A sync is already in progress")

    auth_key = body.get("authKey")
    controller.set_credential(auth_key if isinstance(auth_key, str) else "")

    await controller.sync_addons()
    return web.json_response(controller.snapshot())


async def health_handler(request: web.Request) -> web.Response:
    """Health check endpoint."""
    settings = request.app[SETTINGS_KEY]
    started_at = request.app[STARTED_AT_KEY]
    now = datetime.now(timezone.utc)

    return web.json_response({
        "status": "healthy",
        "timestamp": now.isoformat(),
        "version": settings.version,
        "environment": settings.environment,
        "uptime_seconds": int((now - started_at).total_seconds())
    })


async def status_handler(request: web.Request) -> web.Response:
    """Detailed status endpoint."""
    settings = request.app[SETTINGS_KEY]
    client = request.app[CLIENT_KEY]

    return web.json_response({
        "application": {
            "name": settings.name,
            "version": settings.version,
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat()
        },
        "sessions": {
            "active": len(request.app[SESSIONS_KEY]),
            "max": settings.web.max_sessions
        },
        "api_client": client.get_client_info() if hasattr(client, "get_client_info") else {}
    })


async def _close_client(app: web.Application) -> None:
    await app[CLIENT_KEY].close()
    logger.info("Stremio client closed")


def create_app(
    settings: Optional[AppSettings] = None,
    client: Optional[Any] = None
) -> web.Application:
    """Create the web application.

    Args:
        settings: Application settings; defaults to the environment
        client: Stremio client shared by all sessions. When omitted one is
            built from settings and closed on application cleanup.

    Returns:
        Configured aiohttp application
    """
    settings = settings or get_settings()

    app = web.Application(
        client_max_size=settings.addon_file.max_upload_bytes,
        middlewares=[session_middleware],
    )

    app[SETTINGS_KEY] = settings
    app[STARTED_AT_KEY] = datetime.now(timezone.utc)
    app[TEMPLATES_KEY] = _build_templates()

    if client is None:
        client = StremioAPIClient(
            base_url=settings.stremio.api_base,
            timeout_seconds=settings.stremio.timeout_seconds,
        )
        app.on_cleanup.append(_close_client)
    app[CLIENT_KEY] = client

    def controller_factory() -> SyncController:
        return SyncController(
            client,
            accepted_content_types=settings.addon_file.accepted_content_types,
            strict_collection=settings.addon_file.strict_collection,
        )

    app[SESSIONS_KEY] = SessionStore(controller_factory, max_sessions=settings.web.max_sessions)

    app.router.add_get("/", index_handler)
    app.router.add_get("/api/state", state_handler)
    app.router.add_post("/api/upload", upload_handler)
    app.router.add_post("/api/sync", sync_handler)
    app.router.add_get("/health", health_handler)
    app.router.add_get("/status", status_handler)

    return app
