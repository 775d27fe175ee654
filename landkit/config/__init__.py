"""Load and validate landkit project configuration.

``landkit.yaml`` at the project root carries server, output, and style
settings; ``pages/index.yaml`` may describe pages declaratively instead of in
``pages/index.py``. Both are parsed with ruamel.yaml into dataclasses.

Examples
--------
>>> from pathlib import Path
>>> from landkit.config import load_project_config
>>> config = load_project_config(Path("my-site"))  # doctest: +SKIP
>>> config.port  # doctest: +SKIP
3000
"""

from .loader import PROJECT_CONFIG_NAME, load_pages_config, load_project_config
from .models import DEFAULT_HOST, DEFAULT_PORT, ProjectConfig, TailwindConfig

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "PROJECT_CONFIG_NAME",
    "ProjectConfig",
    "TailwindConfig",
    "load_pages_config",
    "load_project_config",
]
