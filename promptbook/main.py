"""FastAPI entrypoint for the Promptbook web app."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import parse_qs, urlencode

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from promptbook.api.api import api_router
from promptbook.auth import SessionUser, get_current_user, sign_in, sign_out
from promptbook.core.config import settings
from promptbook.db import session as db_session
from promptbook.db.base import Base
from promptbook.db.seed import ensure_seed_data
from promptbook.services.posts_client import PostsClient
from promptbook.services.profile_view import (
    ProfileState,
    ProfileView,
    parse_profile_params,
    parse_user_id,
    welcome_message,
)
from promptbook.services.user_repository import UserRepository, get_user_repository

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, description=settings.app_description)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=False,
    max_age=60 * 60 * 24 * 7,
)
app.include_router(api_router, prefix="/api")
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

LAYOUT_METADATA: dict[str, str] = {
    "title": settings.app_name,
    "description": settings.app_description,
    "favicon": "/static/assets/icons/favicon.svg",
}


def inject_globals(request: Request) -> dict:
    """Inject layout metadata and the session user for Jinja templates."""
    return {
        "metadata": LAYOUT_METADATA,
        "current_user": get_current_user(request),
    }


def render_template(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    """Render a template with required request object and shared global context."""
    payload = {"request": request, **inject_globals(request)}
    if context:
        payload.update(context)
    return templates.TemplateResponse(request, name, payload, status_code=status_code)


def get_posts_client() -> PostsClient:
    """Build the posts client; an empty base URL routes requests back into this app."""
    transport = None if settings.posts_api_base_url else httpx.ASGITransport(app=app)
    return PostsClient(
        base_url=settings.posts_api_base_url,
        timeout=settings.posts_fetch_timeout,
        transport=transport,
    )


@app.on_event("startup")
def startup() -> None:
    logging.getLogger("promptbook").setLevel(settings.log_level)
    secret_from_env = bool(os.getenv("SESSION_SECRET"))
    logger.info("Session secret source: %s", "env" if secret_from_env else "fallback")
    if not secret_from_env:
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    logger.info("[BOOTSTRAP] user store: %s", settings.user_store)
    if settings.user_store != "sql":
        return
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            ensure_seed_data(session)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")


def profile_href(user_id: int, name: str) -> str:
    return f"/profile/{user_id}?{urlencode({'name': name})}"


async def _form_data(request: Request) -> dict[str, str]:
    body = (await request.body()).decode()
    parsed = parse_qs(body, keep_blank_values=True)
    return {key: values[-1] if values else "" for key, values in parsed.items()}


@app.get("/", response_class=HTMLResponse)
def home(request: Request, repository: UserRepository = Depends(get_user_repository)):
    users = repository.list_users()
    links = [{"name": user.name, "href": profile_href(user.id, user.name)} for user in users]
    return render_template(request, "home.html", {"users": links})


def _render_login(request: Request, repository: UserRepository, error: str | None = None, status_code: int = 200):
    return render_template(
        request,
        "login.html",
        {"error": error, "users": repository.list_users()},
        status_code=status_code,
    )


@app.get("/login", response_class=HTMLResponse)
def login_page(request: Request, error: str | None = None, repository: UserRepository = Depends(get_user_repository)):
    return _render_login(request, repository, error=error)


@app.post("/login", response_class=RedirectResponse)
async def login_submit(request: Request, repository: UserRepository = Depends(get_user_repository)):
    form = await _form_data(request)
    raw_user_id = form.get("user_id", "").strip()
    parsed_user_id = parse_user_id(raw_user_id)
    user = repository.get_user(parsed_user_id) if parsed_user_id is not None else None
    if user is None:
        logger.info("[AUTH] rejected sign-in for user_id=%r", raw_user_id)
        return _render_login(request, repository, error="Unknown user", status_code=400)
    sign_in(request, user.id, user.name)
    logger.info("[AUTH] signed in user_id=%s", user.id)
    return RedirectResponse(url=profile_href(user.id, user.name), status_code=303)


@app.post("/logout", response_class=RedirectResponse)
def logout(request: Request):
    sign_out(request)
    return RedirectResponse(url="/", status_code=303)


@app.get("/logout", response_class=RedirectResponse)
def logout_get(request: Request):
    return logout(request)


@app.get("/profile/{user_id}", response_class=HTMLResponse)
async def profile_page(
    request: Request,
    user_id: str,
    name: str | None = None,
    current: SessionUser | None = Depends(get_current_user),
    posts_client: PostsClient = Depends(get_posts_client),
    repository: UserRepository = Depends(get_user_repository),
):
    params = parse_profile_params(user_id, name)
    view = ProfileView()
    state = await view.sync(params, current, posts_client)

    fallback_name = None
    if params.name is None and params.user_id is not None:
        known = repository.get_user(params.user_id)
        fallback_name = known.name if known is not None else None
    display_name = params.display_name(fallback_name)

    status_code = 404 if state is ProfileState.INVALID_ROUTE else 200
    return render_template(
        request,
        "profile.html",
        {
            "name": display_name,
            "desc": welcome_message(display_name),
            "data": view.posts,
            "state": state.value,
            "error": view.error,
            "route_id": params.raw_id,
        },
        status_code=status_code,
    )


@app.get("/__debug/session", include_in_schema=False)
def debug_session(request: Request):
    if not settings.debug:
        raise HTTPException(status_code=404, detail="Not found")
    session_keys = sorted(request.session.keys())
    return {
        "path": str(request.url.path),
        "session_present": len(session_keys) > 0,
        "session_keys": session_keys,
        "user_id": request.session.get("user_id"),
        "cookie_seen": "session" in request.cookies,
    }


@app.get("/__debug/routes", include_in_schema=False, response_class=PlainTextResponse)
def debug_routes() -> PlainTextResponse:
    if not settings.debug:
        raise HTTPException(status_code=404, detail="Not found")
    lines = []
    for route in app.routes:
        path = getattr(route, "path", None)
        if path is None:
            continue
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        endpoint = getattr(route, "endpoint", None)
        lines.append(f"{path} [{methods}] -> {getattr(endpoint, '__name__', '<no-endpoint>')}")
    return PlainTextResponse("\n".join(sorted(lines)))
