from __future__ import annotations

"""Extension lookup and installation through the editor command-line tool.

Wraps ``code --list-extensions`` and ``code --install-extension <id>``.
"""

import logging
import shutil
import subprocess
from typing import List, Optional

from urn_catalog_toolkit.core.exceptions import ExtensionInstallError

logger = logging.getLogger(__name__)

__all__ = ["EditorCliExtensionHost"]


class EditorCliExtensionHost:
    """:class:`ExtensionHost` backed by the editor CLI."""

    def __init__(self, editor_command: str = "code", timeout: int = 300) -> None:
        self._editor_command = editor_command
        self._timeout = timeout  # seconds, per CLI call

    def _resolve(self) -> str:
        # ``code`` is a .cmd shim on Windows; which() finds it, Popen alone does not.
        return shutil.which(self._editor_command) or self._editor_command

    def list_extensions(self) -> List[str]:
        """Return installed extension ids, or [] when the CLI is unavailable."""
        cmd = [self._resolve(), "--list-extensions"]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not list editor extensions: %s", e)
            return []
        if result.returncode != 0:
            logger.warning("Listing editor extensions failed: %s", result.stderr.strip())
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_extension(self, extension_id: str) -> bool:
        wanted = extension_id.lower()
        return any(ext.lower() == wanted for ext in self.list_extensions())

    def install_extension(self, extension_id: str) -> str:
        cmd = [self._resolve(), "--install-extension", extension_id]
        logger.debug("Running editor command: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise ExtensionInstallError(extension_id, "timed out", cause=e) from e
        except OSError as e:
            raise ExtensionInstallError(extension_id, str(e), cause=e) from e

        logger.info("Install %s stdout: %s", extension_id, result.stdout.strip())
        if result.stderr.strip():
            logger.info("Install %s stderr: %s", extension_id, result.stderr.strip())
        if result.returncode != 0:
            raise ExtensionInstallError(extension_id, _first_line(result.stderr) or f"exit code {result.returncode}")
        return result.stdout


def _first_line(text: Optional[str]) -> str:
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""
