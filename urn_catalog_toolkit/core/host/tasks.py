from __future__ import annotations

"""Task definitions and a subprocess-backed task runner.

:class:`MagentoTaskProvider` builds ``bin/magento`` tasks for a project;
:class:`SubprocessTaskRunner` starts them and fires a
:class:`~urn_catalog_toolkit.core.models.TaskEndEvent` when the process
exits.
"""

import logging
import subprocess
import threading
from typing import Callable, Sequence

from urn_catalog_toolkit.core.events import Disposable, EventEmitter
from urn_catalog_toolkit.core.models import (
    CatalogSettings,
    TaskEndEvent,
    TaskExecution,
    TaskSpec,
    WorkspaceFolder,
)

logger = logging.getLogger(__name__)

__all__ = ["MagentoTaskProvider", "SubprocessTaskRunner"]


class MagentoTaskProvider:
    """Creates ``bin/magento`` tasks rooted at a workspace folder."""

    def __init__(self, workspace: WorkspaceFolder, settings: CatalogSettings | None = None) -> None:
        self.workspace = workspace
        self.settings = settings or CatalogSettings()

    def get_task(self, command: str, args: Sequence[str] = ()) -> TaskSpec:
        """Return a task running ``bin/magento <command> <args...>``."""
        return TaskSpec(
            name=command,
            command=tuple(self.settings.magento_command),
            args=(command, *args),
            cwd=self.workspace.path,
        )


class SubprocessTaskRunner:
    """Runs each task as a child process watched by a daemon thread."""

    def __init__(self) -> None:
        self._ended: EventEmitter[TaskEndEvent] = EventEmitter("task end")

    def on_did_end_task(self, listener: Callable[[TaskEndEvent], None]) -> Disposable:
        return self._ended.subscribe(listener)

    def execute_task(self, task: TaskSpec) -> TaskExecution:
        """Start *task*; raises ``OSError`` when the executable is missing."""
        logger.info("Task start: %s", " ".join(task.argv))
        # Build tools print in whatever encoding they like; never fail on it.
        process = subprocess.Popen(
            list(task.argv),
            cwd=str(task.cwd) if task.cwd else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        execution = TaskExecution(task)

        watcher = threading.Thread(
            target=self._watch,
            args=(execution, process),
            name=f"task-{task.name}",
            daemon=True,
        )
        watcher.start()
        return execution

    def _watch(self, execution: TaskExecution, process: subprocess.Popen) -> None:
        try:
            assert process.stdout is not None
            for line in process.stdout:
                logger.info("[%s] %s", execution.task.name, line.rstrip())
        except Exception:
            logger.error("Task output FAIL: %s", execution.task.name, exc_info=True)
        finally:
            # The end event must fire even when reading output failed.
            if process.stdout is not None:
                process.stdout.close()
            exit_code = process.wait()
            if exit_code:
                logger.warning("Task end: %s exited with code %d", execution.task.name, exit_code)
            else:
                logger.info("Task end: %s", execution.task.name)
            self._ended.fire(TaskEndEvent(execution=execution, exit_code=exit_code))
