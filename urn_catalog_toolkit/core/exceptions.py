from __future__ import annotations

"""Exception classes for catalog generation.

Every error raised by the toolkit derives from :class:`CatalogToolkitError`
so front-ends can report failures with a single handler.
"""

from pathlib import Path
from typing import Optional, Union

__all__ = [
    "CatalogToolkitError",
    "CatalogParseError",
    "TaskExecutionError",
    "ExtensionInstallError",
    "SettingsError",
]

PathLike = Union[str, Path]


class CatalogToolkitError(Exception):
    """Base exception for all toolkit errors.

    Carries the offending path (when one is involved) and the underlying
    cause so that log records keep the full context.
    """

    def __init__(self, message: str, path: Optional[PathLike] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.cause = cause


class CatalogParseError(CatalogToolkitError):
    """Raised when a URN mapping file is not well-formed XML."""

    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Error parsing {Path(path)}", path=path, cause=cause)


class TaskExecutionError(CatalogToolkitError):
    """Raised when a build-tool task cannot be submitted."""

    def __init__(self, task_name: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Error executing {task_name}", cause=cause)
        self.task_name = task_name


class ExtensionInstallError(CatalogToolkitError):
    """Raised when the editor CLI fails to install an extension."""

    def __init__(self, extension_id: str, detail: str = "",
                 cause: Optional[BaseException] = None) -> None:
        message = f"Could not install extension {extension_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, cause=cause)
        self.extension_id = extension_id


class SettingsError(CatalogToolkitError):
    """Raised when workspace settings cannot be read or written."""
    pass
