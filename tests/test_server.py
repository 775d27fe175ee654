"""Tests for the Starlette preview server.

Requests go through Starlette's ``TestClient``; no socket is opened.
"""

from __future__ import annotations

from pathlib import Path

from starlette.testclient import TestClient

from landkit import create_app
from landkit.server import PreviewServer


def test_pages_are_served_per_route(tmp_path: Path) -> None:
    app = create_app(tmp_path)
    app.create_page("/", {"title": "Home", "hero": {"title": "Welcome"}})
    app.create_page("/about", {"title": "About"})
    client = TestClient(PreviewServer(app).asgi)

    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Welcome" in response.text
    assert "<title>About</title>" in client.get("/about").text


def test_unknown_route_is_not_found(tmp_path: Path) -> None:
    app = create_app(tmp_path)
    app.create_page("/", {"title": "Home"})
    client = TestClient(PreviewServer(app).asgi)
    assert client.get("/missing").status_code == 404


def test_pages_are_rendered_per_request(tmp_path: Path) -> None:
    """Re-creating a page is visible on the next request without a restart."""
    app = create_app(tmp_path)
    app.create_page("/", {"title": "Before"})
    client = TestClient(PreviewServer(app).asgi)
    assert "Before" in client.get("/").text
    app.create_page("/", {"title": "After"})
    assert "After" in client.get("/").text


def test_public_files_are_served(tmp_path: Path) -> None:
    public = tmp_path / "public"
    public.mkdir()
    (public / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    app = create_app(tmp_path)
    app.create_page("/", {"title": "Home"})
    client = TestClient(PreviewServer(app, public_dir=public).asgi)
    assert client.get("/robots.txt").text == "User-agent: *\n"
    assert "<title>Home</title>" in client.get("/").text


def test_refresh_rebinds_routes(tmp_path: Path) -> None:
    app = create_app(tmp_path)
    app.create_page("/", {"title": "Home"})
    server = PreviewServer(app)
    client = TestClient(server.asgi)
    assert client.get("/pricing").status_code == 404

    reloaded = create_app(tmp_path)
    reloaded.create_page("/pricing", {"title": "Pricing"})
    server.refresh(reloaded)
    assert server.app is reloaded
    assert "<title>Pricing</title>" in client.get("/pricing").text
    assert client.get("/").status_code == 404
