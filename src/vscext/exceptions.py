from __future__ import annotations


class VscextError(Exception):
    """Base class for all vscext domain errors."""


class InvalidFilenameError(ValueError, VscextError):
    """Raised when a manifest filename could escape the output directory."""


class ManifestNotFoundError(FileNotFoundError, VscextError):
    """Raised when the manifest file to import does not exist."""


class InvalidManifestError(ValueError, VscextError):
    """Raised when manifest contents are not a valid extension list."""


class ExtensionListingError(RuntimeError, VscextError):
    """Raised when the editor CLI fails to list installed extensions."""


class OperationCancelledError(VscextError):
    """Raised when the user declines a confirmation prompt."""
