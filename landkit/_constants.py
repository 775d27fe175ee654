"""Common literal values used across landkit.

Examples
--------
>>> from landkit import _constants
>>> _constants.PROJECT_DIRECTORIES
('pages', 'components', 'styles', 'public')
"""

LANDKIT_VERSION = "0.1.0"
ENV_VAR = "LANDKIT_ENV"
PROJECT_DIRECTORIES = ("pages", "components", "styles", "public")
ENTRY_NAMES = ("index.py", "index.yaml", "index.yml")
MANIFEST_NAME = "manifest.json"
DEFAULT_BUILD_SOURCE = "src"
