"""Build landing pages from reusable components.

landkit composes pages from a small set of components (``hero``, ``cta``,
``footer`` and your own), renders them with Jinja, and serves or exports the
result.

Exports
-------
- ``create_app``: Build a :class:`LandingApp` for a project directory.
- ``LandingApp``: Registry, pages and preview server of one site.
- ``components``: Built-in components and the component registry.
- ``main``: Entry point of the ``landkit`` console command.

Examples
--------
A project's ``pages/index.py``:

>>> from landkit import create_app
>>> app = create_app()  # doctest: +SKIP
>>> app.create_page("/", {"title": "Acme", "hero": {"title": "Welcome"}})  # doctest: +SKIP
"""

from __future__ import annotations

from . import components
from ._constants import LANDKIT_VERSION
from .app import LandingApp, create_app
from .cli import main

__version__ = LANDKIT_VERSION

__all__ = ["LandingApp", "__version__", "components", "create_app", "main"]
