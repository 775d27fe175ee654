"""Tests for the ``landkit`` Cyclopts commands.

Commands run in-process through :func:`landkit.cli.main`; the ``serve``
command is exercised with the server's ``run`` method patched out so no
socket is bound.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from landkit import cli
from landkit.server import PreviewServer


@pytest.fixture(autouse=True)
def _development_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LANDKIT_ENV", raising=False)


def test_create_without_prompts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "site"
    assert cli.main(["create", str(target), "--no-input", "--title", "Acme"]) == 0
    out = capsys.readouterr().out
    assert "wrote" in out
    assert "pages/index.py" in out
    assert "'Acme'" in (target / "pages" / "index.py").read_text(encoding="utf-8")
    assert cli.DEFAULT_DESCRIPTION in (target / "README.md").read_text(encoding="utf-8")


def test_create_prompts_for_missing_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    answers = iter(["Prompted", "From the prompt"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(answers))
    target = tmp_path / "site"
    assert cli.main(["create", str(target)]) == 0
    readme = (target / "README.md").read_text(encoding="utf-8")
    assert readme.startswith("# Prompted\n")
    assert "From the prompt" in readme


def test_create_into_non_empty_directory_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "occupied.txt").write_text("x", encoding="utf-8")
    assert cli.main(["create", str(tmp_path), "--no-input"]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_build_exports_project(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "site"
    cli.main(["create", str(target), "--no-input"])
    (target / "public" / "app.js").write_text("console.log('hi');\n", encoding="utf-8")
    capsys.readouterr()

    assert cli.main(["build", "--project", str(target)]) == 0
    dist = target / "dist"
    assert (dist / "index.html").exists()
    assert (dist / "app.js").exists()
    assert (dist / "manifest.json").exists()
    assert "index.html" in capsys.readouterr().out


def test_build_package_source(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.js").write_text("let a = 1;\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Pkg\n", encoding="utf-8")
    out = tmp_path / "out"
    assert cli.main(["build", "--project", str(tmp_path), "--output", str(out)]) == 0
    assert (out / "main.js").read_text(encoding="utf-8") == "let a = 1;\n"
    assert (out / "README.md").exists()


def test_errors_exit_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main(["serve", "--project", str(tmp_path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: Could not find pages/index.py")


def test_serve_runs_preview_server(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: list[dict[str, typ.Any]] = []

    def fake_run(self: PreviewServer, *, host: str, port: int) -> None:
        calls.append({"host": host, "port": port, "routes": self.app.routes()})

    monkeypatch.setattr(PreviewServer, "run", fake_run)
    target = tmp_path / "site"
    cli.main(["create", str(target), "--no-input"])
    capsys.readouterr()

    assert cli.main(["serve", "--project", str(target), "--port", "4321", "--watch"]) == 0
    assert calls == [{"host": "127.0.0.1", "port": 4321, "routes": ["/"]}]
    assert "http://127.0.0.1:4321" in capsys.readouterr().out


def test_build_manifest_covers_pages_and_assets(tmp_path: Path) -> None:
    target = tmp_path / "site"
    cli.main(["create", str(target), "--no-input"])
    (target / "public" / "app.js").write_text("let a = 1;\n", encoding="utf-8")
    assert cli.main(["build", "--project", str(target)]) == 0
    manifest = json.loads((target / "dist" / "manifest.json").read_text(encoding="utf-8"))
    assert set(manifest["files"]) == {"app.js", "index.html"}


def test_build_manifest_without_public_assets(tmp_path: Path) -> None:
    target = tmp_path / "site"
    cli.main(["create", str(target), "--no-input"])
    (target / "public").rmdir()
    assert cli.main(["build", "--project", str(target)]) == 0
    manifest = json.loads((target / "dist" / "manifest.json").read_text(encoding="utf-8"))
    assert list(manifest["files"]) == ["index.html"]


def test_build_into_project_root_is_refused(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    target = tmp_path / "site"
    cli.main(["create", str(target), "--no-input"])
    capsys.readouterr()
    assert cli.main(["build", "--project", str(target), "--output", str(target)]) == 1
    assert "output directory" in capsys.readouterr().err
    assert (target / "pages" / "index.py").exists()


def test_add_writes_builtin_component(tmp_path: Path) -> None:
    assert cli.main(["add", "cta", "--project", str(tmp_path)]) == 0
    soup = BeautifulSoup((tmp_path / "cta.html").read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one(".landkit-cta") is not None


def test_add_unknown_component_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main(["add", "pricing", "--project", str(tmp_path)]) == 1
    assert "pricing" in capsys.readouterr().err
    assert not (tmp_path / "pricing.html").exists()
