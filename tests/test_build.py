"""Tests for the asset and package build pipeline.

Usage
-----
Run ``pytest tests/test_build.py -v``. Builds run against small source trees
under ``tmp_path``; SCSS goes through the real libsass compiler.
"""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import pytest
import tomlkit

from landkit.build import (
    BuildMode,
    BuildPipeline,
    BuildSettings,
    clean_pyproject,
    strip_console_calls,
)
from landkit.errors import BuildError

SCRIPT = dedent(
    """
    function add(a, b) {
      console.log("adding", a, b);
      debugger;
      return a + b;
    }
    """
).lstrip()


def _source_tree(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    (src / "js").mkdir(parents=True)
    (src / "js" / "app.js").write_text(SCRIPT, encoding="utf-8")
    (src / "css").mkdir()
    (src / "css" / "site.css").write_text(
        "a {\n  user-select: none;\n  color: red;\n}\n", encoding="utf-8"
    )
    (src / "css" / "_vars.scss").write_text("$brand: #123456;\n", encoding="utf-8")
    (src / "css" / "theme.scss").write_text(
        '@import "vars";\n.btn { color: $brand; }\n', encoding="utf-8"
    )
    (src / "pkg").mkdir()
    (src / "pkg" / "__init__.py").write_text("VALUE = 1\n", encoding="utf-8")
    (src / "logo.svg").write_text("<svg></svg>\n", encoding="utf-8")
    return src


def test_settings_follow_environment() -> None:
    production = BuildSettings.from_env({"LANDKIT_ENV": "production"})
    development = BuildSettings.from_env({})
    assert production == BuildSettings(BuildMode.PRODUCTION, minify=True, drop_console=True)
    assert development.mode is BuildMode.DEVELOPMENT
    assert not development.minify
    assert BuildSettings.for_mode("staging").mode is BuildMode.DEVELOPMENT


def test_development_build_copies_readable_output(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    out = tmp_path / "dist"
    result = BuildPipeline(
        src, out, settings=BuildSettings.for_mode("development"), include_metadata=False
    ).run()

    assert (out / "js" / "app.js").read_text(encoding="utf-8") == SCRIPT
    css = (out / "css" / "site.css").read_text(encoding="utf-8")
    assert "-webkit-user-select: none;" in css
    assert "\n  color: red;" in css
    theme = (out / "css" / "theme.css").read_text(encoding="utf-8")
    assert "color: #123456" in theme
    assert not (out / "css" / "_vars.css").exists(), "partials are not emitted"
    assert not (out / "css" / "theme.scss").exists()
    assert (out / "logo.svg").read_text(encoding="utf-8") == "<svg></svg>\n"
    assert (out / "pkg" / "__init__.py").exists()
    assert out / "js" / "app.js" in result.outputs


def test_production_build_minifies_and_drops_console(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    out = tmp_path / "dist"
    BuildPipeline(
        src, out, settings=BuildSettings.for_mode("production"), include_metadata=False
    ).run()

    script = (out / "js" / "app.js").read_text(encoding="utf-8")
    assert "console" not in script
    assert "debugger" not in script
    assert "return a+b" in script
    css = (out / "css" / "site.css").read_text(encoding="utf-8")
    assert "\n" not in css.strip()
    assert "-webkit-user-select:none" in css


def test_manifest_lists_hashes(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    out = tmp_path / "dist"
    result = BuildPipeline(
        src, out, settings=BuildSettings.for_mode("development"), include_metadata=False
    ).run()

    assert result.manifest == out / "manifest.json"
    manifest = json.loads(result.manifest.read_text(encoding="utf-8"))
    assert manifest["mode"] == "development"
    assert set(manifest["files"]) == {
        "css/site.css",
        "css/theme.css",
        "js/app.js",
        "logo.svg",
        "pkg/__init__.py",
    }
    assert all(len(digest) == 8 for digest in manifest["files"].values())


def test_clean_build_removes_stale_output(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    out = tmp_path / "dist"
    out.mkdir()
    (out / "stale.txt").write_text("old", encoding="utf-8")
    BuildPipeline(src, out, settings=BuildSettings.for_mode("development")).run()
    assert not (out / "stale.txt").exists()


def test_python_syntax_errors_name_the_file(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    (src / "pkg" / "broken.py").write_text("def oops(:\n", encoding="utf-8")
    with pytest.raises(BuildError) as excinfo:
        BuildPipeline(src, tmp_path / "dist", settings=BuildSettings.for_mode("production")).run()
    assert excinfo.value.path == Path("pkg/broken.py")
    assert "pkg/broken.py" in str(excinfo.value)


def test_missing_source_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        BuildPipeline(tmp_path / "src", tmp_path / "dist").run()


def test_metadata_and_templates_are_copied(tmp_path: Path) -> None:
    src = _source_tree(tmp_path)
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "page.jinja").write_text("<html></html>\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Demo\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        dedent(
            """
            [project]
            name = "demo"
            version = "1.0.0"
            dependencies = ["jinja2"]

            [project.optional-dependencies]
            test = ["pytest"]
            server = ["uvicorn"]

            [dependency-groups]
            dev = ["ruff"]

            [tool.pytest.ini_options]
            addopts = "-q"
            """
        ).lstrip(),
        encoding="utf-8",
    )
    out = tmp_path / "dist"
    result = BuildPipeline(
        src,
        out,
        settings=BuildSettings.for_mode("development"),
        templates_dir=tmp_path / "templates",
    ).run()

    assert (out / "templates" / "page.jinja").exists()
    assert (out / "README.md").read_text(encoding="utf-8") == "# Demo\n"
    cleaned = tomlkit.parse((out / "pyproject.toml").read_text(encoding="utf-8"))
    assert "tool" not in cleaned
    assert "dependency-groups" not in cleaned
    assert dict(cleaned["project"]["optional-dependencies"]) == {"server": ["uvicorn"]}
    assert out / "pyproject.toml" in result.outputs


def test_clean_pyproject_drops_empty_extras() -> None:
    text = '[project]\nname = "demo"\n\n[project.optional-dependencies]\ndev = ["ruff"]\n'
    cleaned = tomlkit.parse(clean_pyproject(text))
    assert "optional-dependencies" not in cleaned["project"]
    assert cleaned["project"]["name"] == "demo"


def test_strip_console_calls_handles_nested_parentheses() -> None:
    source = 'console.info(fmt(a, b)); keep(); console.debug("x")\n'
    assert strip_console_calls(source) == " keep(); \n"


def test_strip_console_calls_skips_literals() -> None:
    source = dedent(
        """
        console.log("a)b", 'c(', `t ${f(")")}`);
        const re = /console\\.log\\(/g;
        const msg = "console.log(1)"; // console.info(2)
        run();
        """
    ).lstrip()
    assert strip_console_calls(source) == "\n" + dedent(
        """
        const re = /console\\.log\\(/g;
        const msg = "console.log(1)"; // console.info(2)
        run();
        """
    ).lstrip()


def test_strip_console_calls_keeps_expressions_valid() -> None:
    assert strip_console_calls("const x = console.log(1) || 2;") == "const x = void 0 || 2;"
    assert strip_console_calls("logger.console.log(1);") == "logger.console.log(1);"
    assert strip_console_calls("if (a) debugger; else b();") == "if (a) void 0; else b();"


@pytest.mark.parametrize("output", [".", "src/out"])
def test_output_overlapping_sources_is_refused(tmp_path: Path, output: str) -> None:
    src = _source_tree(tmp_path)
    with pytest.raises(BuildError, match="output directory"):
        BuildPipeline(src, tmp_path / output, settings=BuildSettings.for_mode("development")).run()
    assert (src / "js" / "app.js").exists()
    assert (src / "pkg" / "__init__.py").exists()
