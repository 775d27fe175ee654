"""Development preview server.

:class:`PreviewServer` binds one Starlette route per page of a
:class:`~landkit.app.LandingApp` and re-renders the page on every request, so
component and style changes show up without restarting. Files under the
project's ``public/`` directory are served as static assets. The server runs
on uvicorn.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import uvicorn
from starlette.applications import Starlette
from starlette.responses import HTMLResponse, PlainTextResponse, Response
from starlette.routing import BaseRoute, Mount, Route
from starlette.staticfiles import StaticFiles

from .errors import PageNotFoundError

if typ.TYPE_CHECKING:
    from starlette.requests import Request

    from .app import LandingApp

logger = logging.getLogger(__name__)


class PreviewServer:
    """Serve the pages of a :class:`LandingApp` over HTTP."""

    def __init__(self, app: LandingApp, *, public_dir: Path | None = None) -> None:
        self.app = app
        self.public_dir = public_dir
        self.asgi = Starlette(debug=True, routes=self._routes())
        self._server: uvicorn.Server | None = None

    def refresh(self, app: LandingApp | None = None) -> None:
        """Rebind routes, optionally switching to a freshly loaded ``app``."""
        if app is not None:
            self.app = app
        self.asgi.router.routes[:] = self._routes()
        logger.info("routes: %s", ", ".join(self.app.routes()) or "(none)")

    def run(self, *, host: str, port: int) -> None:
        """Serve until interrupted or :meth:`stop` is called."""
        config = uvicorn.Config(self.asgi, host=host, port=port, log_level="info")
        self._server = uvicorn.Server(config)
        self._server.run()

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True

    def _routes(self) -> list[BaseRoute]:
        routes: list[BaseRoute] = [
            Route(route, self._endpoint(route), methods=["GET", "HEAD"])
            for route in self.app.routes()
        ]
        if self.public_dir is not None and self.public_dir.is_dir():
            routes.append(
                Mount("/", app=StaticFiles(directory=self.public_dir), name="public")
            )
        return routes

    def _endpoint(self, route: str) -> typ.Callable[[Request], typ.Awaitable[Response]]:
        async def endpoint(request: Request) -> Response:
            try:
                html = self.app.render_page(route)
            except PageNotFoundError:
                return PlainTextResponse("Not Found", status_code=404)
            return HTMLResponse(html)

        return endpoint


__all__ = ["PreviewServer"]
