"""FastAPI application for the subtext local JSON API."""

import logging
import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..adapters.serialize import attributed_to_dict, document_to_dict, inline_to_dict, rich_to_dict
from ..parser.headers import parse_envelope
from ..render.plain import render_plain
from ..render.semantic import render_semantic
from ..render.verbatim import render_markup, render_verbatim

logger = logging.getLogger(__name__)

RENDER_MODES = ("markup", "plain", "verbatim", "semantic", "html")


class MarkupRequest(BaseModel):
    markup: str
    note: bool = False  # strip a leading header block first


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> Any:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with config, parser and resolver
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Subtext API",
        description="Local JSON API for parsing and rendering Subtext",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    def load(req: MarkupRequest) -> Any:
        markup = req.markup
        if req.note:
            markup = parse_envelope(markup).body
        return runtime.parser.parse(markup)

    @app.get("/health")  # type: ignore[misc]
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/parse")  # type: ignore[misc]
    async def parse(req: MarkupRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Parsed block and inline structure."""
        return document_to_dict(load(req))

    @app.post("/render")  # type: ignore[misc]
    async def render(
        req: MarkupRequest,
        mode: str = Query("plain", description="markup | plain | verbatim | semantic | html"),
        separator: str | None = Query(None, description="Block separator for plain mode"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Render markup in one of the output projections."""
        if mode not in RENDER_MODES:
            raise HTTPException(status_code=400, detail=f"Unknown render mode: {mode}")

        doc = load(req)
        resolve = runtime.resolver.resolve
        if mode == "markup":
            return {"mode": mode, "text": render_markup(doc)}
        if mode == "plain":
            if separator is None:
                separator = runtime.config.render.block_separator
            return {"mode": mode, "text": render_plain(doc, separator)}
        if mode == "verbatim":
            return {"mode": mode, **attributed_to_dict(render_verbatim(doc, resolve))}
        if mode == "semantic":
            return {"mode": mode, **rich_to_dict(render_semantic(doc, resolve))}
        return {"mode": mode, "html": render_semantic(doc, resolve).to_html()}

    @app.post("/links")  # type: ignore[misc]
    async def links(req: MarkupRequest, auth: None = Depends(verify_token)) -> list[dict[str, Any]]:
        """Link-like spans in source order, for backlink indexing."""
        return [inline_to_dict(i) for i in load(req).link_spans()]

    @app.post("/excerpt")  # type: ignore[misc]
    async def excerpt(
        req: MarkupRequest,
        max_chars: int | None = Query(None, ge=0, description="Truncation limit"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Excerpt and derived title."""
        doc = load(req)
        cfg = runtime.config.excerpt
        limit = cfg.max_chars if max_chars is None else max_chars
        return {
            "excerpt": doc.excerpt(max_chars=limit, ellipsis=cfg.ellipsis),
            "title": doc.title(),
        }

    logger.info("Created API app (auth=%s, cors=%s)", bool(token), enable_cors)
    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
