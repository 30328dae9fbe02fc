from __future__ import annotations

"""Value types shared by the command, the host adapters and the UI.

All types are plain dataclasses with no behaviour beyond construction.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

__all__ = [
    "SystemEntry",
    "CatalogSettings",
    "ConfigurationTarget",
    "TaskSpec",
    "TaskExecution",
    "TaskEndEvent",
    "WorkspaceFolder",
]


@dataclass(frozen=True)
class SystemEntry:
    """One ``<system systemId=... uri=...>`` mapping."""

    system_id: str
    uri: str


class ConfigurationTarget(Enum):
    """Scope a setting is written to."""

    GLOBAL = "global"
    WORKSPACE = "workspace"
    WORKSPACE_FOLDER = "workspace_folder"


@dataclass
class WorkspaceFolder:
    """Project root the command operates on."""

    path: Path
    name: str = ""

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        if not self.name:
            self.name = self.path.name


@dataclass(frozen=True)
class TaskSpec:
    """Definition of an external process run by a task runner."""

    name: str
    command: Tuple[str, ...]
    args: Tuple[str, ...] = ()
    cwd: Optional[Path] = None

    @property
    def argv(self) -> Tuple[str, ...]:
        return self.command + self.args


class TaskExecution:
    """Opaque handle for a submitted task.

    Handles are compared by identity: two executions of the same spec are
    different handles.
    """

    def __init__(self, task: TaskSpec) -> None:
        self.task = task

    def __repr__(self) -> str:
        return f"<TaskExecution {self.task.name!r} at {id(self):#x}>"


@dataclass(frozen=True)
class TaskEndEvent:
    execution: TaskExecution
    exit_code: Optional[int] = None


@dataclass(frozen=True)
class CatalogSettings:
    """Fixed identifiers used by the catalog command.

    Packaged defaults live in ``config/catalog.yml``; see
    :meth:`from_config`.
    """

    storage_dir: str = ".vscode"
    temp_catalog_name: str = "catalog_tmp.xml"
    catalog_name: str = "catalog.xml"
    xml_extension_id: str = "redhat.vscode-xml"
    catalogs_setting_key: str = "xml.catalogs"
    settings_file_name: str = "settings.json"
    magento_command: Tuple[str, ...] = field(default=("php", "bin/magento"))
    catalog_task_name: str = "dev:urn-catalog:generate"
    editor_command: str = "code"

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "CatalogSettings":
        """Build settings from a config section, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {k: v for k, v in (config or {}).items() if k in known and v is not None}
        command = values.get("magento_command")
        if isinstance(command, str):
            values["magento_command"] = tuple(command.split())
        elif command is not None:
            values["magento_command"] = tuple(str(part) for part in command)
        return cls(**values)

    def storage_path(self, workspace: WorkspaceFolder) -> Path:
        return workspace.path / self.storage_dir

    def temp_catalog_path(self, workspace: WorkspaceFolder) -> Path:
        return self.storage_path(workspace) / self.temp_catalog_name

    def catalog_path(self, workspace: WorkspaceFolder) -> Path:
        return self.storage_path(workspace) / self.catalog_name
