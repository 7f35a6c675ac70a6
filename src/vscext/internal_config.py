from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


PACKAGE_NAME = "vscode-ext-manager"
VSCEXT_VERSION = _get_package_version(PACKAGE_NAME)

DEFAULT_CODE_BINARY = "code"
DEFAULT_CONCURRENCY = 3
DEFAULT_OUTPUT_DIRNAME = "output"
DEFAULT_EXPORT_PREFIX = "vscode-extensions"

CONFIG_FILENAME = ".vscode-ext-config.json"
CONFIG_PATH_ENV = "VSCEXT_CONFIG"

LOG_FORMAT = "%(relativeCreated)d [%(levelname)s] %(message)s"
