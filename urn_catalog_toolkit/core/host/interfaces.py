from __future__ import annotations

"""Host interface definitions.

The catalog command talks to the editor host only through these protocols.
Local implementations live next to this module; tests substitute in-memory
fakes.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from urn_catalog_toolkit.core.events import Disposable
from urn_catalog_toolkit.core.models import ConfigurationTarget, TaskEndEvent, TaskExecution, TaskSpec

__all__ = [
    "TaskRunner",
    "ConfigurationStore",
    "FileSystem",
    "ExtensionHost",
    "Prompter",
    "FileFilters",
]

# Display label -> extensions without dot, e.g. {"Magento XML Catalog": ["xml"]}
FileFilters = Dict[str, List[str]]


@runtime_checkable
class TaskRunner(Protocol):
    """Runs tasks and reports their completion."""

    def execute_task(self, task: TaskSpec) -> TaskExecution:
        """Submit *task* and return its execution handle.

        Raises:
            Exception: If the task cannot be started (e.g. executable not
                found). Callers wrap this into ``TaskExecutionError``.
        """
        ...

    def on_did_end_task(self, listener: Callable[[TaskEndEvent], None]) -> Disposable:
        """Subscribe to completion of any task run by this runner.

        The listener may be called from a worker thread.
        """
        ...


@runtime_checkable
class ConfigurationStore(Protocol):
    """Key-value settings scoped to the current project."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def update(self, key: str, value: Any, target: ConfigurationTarget) -> None:
        ...


@runtime_checkable
class FileSystem(Protocol):
    def exists(self, path: Path) -> bool:
        ...

    def read_bytes(self, path: Path) -> bytes:
        ...

    def write_text(self, path: Path, text: str) -> None:
        ...

    def delete(self, path: Path) -> None:
        ...

    def create_directory(self, path: Path) -> None:
        """Create *path* and missing parents; existing directories are fine."""
        ...


@runtime_checkable
class ExtensionHost(Protocol):
    def get_extension(self, extension_id: str) -> bool:
        """Return True if *extension_id* is installed."""
        ...

    def install_extension(self, extension_id: str) -> str:
        """Install *extension_id* and return the installer's output.

        Raises:
            ExtensionInstallError: If installation fails.
        """
        ...


@runtime_checkable
class Prompter(Protocol):
    """User-facing messages and pickers."""

    def show_information(self, message: str, *buttons: str, modal: bool = False) -> Optional[str]:
        """Show *message*; return the chosen button, or None when dismissed."""
        ...

    def show_error(self, message: str) -> None:
        ...

    def pick_files(self, default_dir: Path, filters: FileFilters,
                   open_label: str = "Open") -> Sequence[Path]:
        """Let the user pick one file; an empty result means cancelled."""
        ...
