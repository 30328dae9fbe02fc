from __future__ import annotations

"""Workspace settings store backed by ``<project>/.vscode/settings.json``.

Keys are stored flat (``"xml.catalogs": [...]``), the way the editor writes
them. Only the workspace scopes are supported; user-level settings live
outside the project and are not touched.

The editor accepts ``//`` and ``/* */`` comments and trailing commas in this
file, so both are stripped before parsing. Comments are not preserved when
the file is rewritten.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict

from urn_catalog_toolkit.core.exceptions import SettingsError
from urn_catalog_toolkit.core.models import ConfigurationTarget

logger = logging.getLogger(__name__)

__all__ = ["WorkspaceSettingsStore", "strip_json_comments"]

_SUPPORTED_TARGETS = (ConfigurationTarget.WORKSPACE, ConfigurationTarget.WORKSPACE_FOLDER)

# Strings first so comment markers and commas inside them are kept as-is.
_JSONC_TOKEN = re.compile(
    r'(?P<string>"(?:[^"\\]|\\.)*")'
    r"|(?P<line_comment>//[^\n]*)"
    r"|(?P<block_comment>/\*.*?\*/)"
    r"|(?P<trailing_comma>,(?=\s*[}\]]))",
    re.DOTALL,
)


def strip_json_comments(text: str) -> str:
    """Return *text* with JSONC comments and trailing commas removed."""

    def _strip(source: str, *, commas: bool) -> str:
        def _replace(match: re.Match) -> str:
            if match.group("string") is not None:
                return match.group("string")
            if match.group("trailing_comma") is not None:
                return "" if commas else match.group(0)
            # keep line numbers stable for decode errors
            return "\n" * match.group(0).count("\n")

        return _JSONC_TOKEN.sub(_replace, source)

    # A comma is only trailing once the comments after it are gone.
    return _strip(_strip(text, commas=False), commas=True)


class WorkspaceSettingsStore:
    """Read and update a single JSON settings file."""

    def __init__(self, settings_path: Path) -> None:
        self._path = Path(settings_path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def update(self, key: str, value: Any, target: ConfigurationTarget) -> None:
        if target not in _SUPPORTED_TARGETS:
            raise SettingsError(f"Unsupported configuration target: {target.value}", path=self._path)

        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.error("I/O FAIL: write settings path=%s", self._path, exc_info=True)
            raise SettingsError(f"Could not write settings {self._path}", path=self._path, cause=exc) from exc
        logger.info("Settings: %s updated in %s", key, self._path)

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsError(f"Could not read settings {self._path}", path=self._path, cause=exc) from exc
        raw = strip_json_comments(raw)
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Invalid JSON in {self._path}", path=self._path, cause=exc) from exc
        if not isinstance(data, dict):
            raise SettingsError(f"Settings root is not an object: {self._path}", path=self._path)
        return data
