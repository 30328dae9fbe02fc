from __future__ import annotations

"""Catalog generation command.

Entry-point for any front-end (Tk dialogs, console) that needs to turn a
Magento URN mapping into an OASIS XML catalog and register it with the XML
extension. The command depends only on the host protocols in
:mod:`urn_catalog_toolkit.core.host.interfaces`.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from urn_catalog_toolkit.core.catalog import convert_mapping
from urn_catalog_toolkit.core.exceptions import ExtensionInstallError, TaskExecutionError
from urn_catalog_toolkit.core.host.interfaces import (
    ConfigurationStore,
    ExtensionHost,
    FileSystem,
    Prompter,
    TaskRunner,
)
from urn_catalog_toolkit.core.host.extensions import EditorCliExtensionHost
from urn_catalog_toolkit.core.host.filesystem import LocalFileSystem
from urn_catalog_toolkit.core.host.settings_store import WorkspaceSettingsStore
from urn_catalog_toolkit.core.host.tasks import MagentoTaskProvider, SubprocessTaskRunner
from urn_catalog_toolkit.core.models import (
    CatalogSettings,
    ConfigurationTarget,
    TaskEndEvent,
    TaskExecution,
    TaskSpec,
    WorkspaceFolder,
)

logger = logging.getLogger(__name__)

__all__ = ["CatalogCommand", "build_catalog_command"]


class CatalogCommand:
    """Generate (or import) a URN catalog for one workspace folder."""

    GENERATE_BUTTON = "Generate XML Catalog"
    EXISTING_FILE_BUTTON = "Use existing Magento XML Catalog file"
    INSTALL_XML_BUTTON = "Install XML extension"

    PROMPT = (
        "This command will generate XML catalog"
        " with Magento 2 XML DTDs, which can be used for validation and completion"
        " in various XML configuration files.\n"
        "Do you want to continue?"
    )
    FILE_FILTERS = {"Magento XML Catalog": ["xml"]}

    def __init__(
        self,
        workspace: WorkspaceFolder,
        *,
        prompter: Prompter,
        file_system: FileSystem,
        configuration: ConfigurationStore,
        task_runner: TaskRunner,
        extensions: ExtensionHost,
        settings: Optional[CatalogSettings] = None,
    ) -> None:
        self.workspace = workspace
        self.settings = settings or CatalogSettings()
        self.prompter = prompter
        self.fs = file_system
        self.configuration = configuration
        self.task_runner = task_runner
        self.extensions = extensions
        self.task_provider = MagentoTaskProvider(workspace, self.settings)

        self.storage_path = self.settings.storage_path(workspace)
        self.temp_catalog_path = self.settings.temp_catalog_path(workspace)
        self.catalog_path = self.settings.catalog_path(workspace)

        self._xml_extension_installed = False

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    @property
    def xml_extension_installed(self) -> bool:
        """Extension presence as of the last check."""
        return self._xml_extension_installed

    def run(self) -> Optional[Path]:
        """Run the whole command.

        Returns:
            Path of the written catalog, or None when the user cancelled or
            no catalog was produced.

        Raises:
            TaskExecutionError: If the build-tool task cannot be started.
            CatalogParseError: If the mapping file is not well-formed XML.
        """
        self._xml_extension_installed = self._check_xml_extension()

        buttons = [self.GENERATE_BUTTON, self.EXISTING_FILE_BUTTON]
        if not self._xml_extension_installed:
            buttons.append(self.INSTALL_XML_BUTTON)
        response = self.prompter.show_information(self.PROMPT, *buttons, modal=True)

        if response == self.INSTALL_XML_BUTTON:
            self._install_xml_extension()
        elif not response:
            logger.info("Catalog: cancelled by user")
            return None

        self.fs.create_directory(self.storage_path)

        if response == self.EXISTING_FILE_BUTTON:
            selected = self.prompter.pick_files(
                self.workspace.path,
                self.FILE_FILTERS,
                open_label="Select XML Catalog",
            )
            if selected and len(selected) == 1:
                return self.convert_catalog(Path(selected[0]), delete_source=False)
            logger.info("Catalog: no file selected")
            return None

        return self.generate_catalog()

    def generate_catalog(self) -> Optional[Path]:
        """Have ``bin/magento`` write the mapping, then convert it."""
        task = self.task_provider.get_task(self.settings.catalog_task_name, [str(self.temp_catalog_path)])
        self._execute_and_wait(task)

        if not self.fs.exists(self.temp_catalog_path):
            self.prompter.show_error("Catalog XML was not generated by bin/magento")
            return None
        return self.convert_catalog(self.temp_catalog_path, delete_source=True)

    def convert_catalog(self, source: Path, *, delete_source: bool) -> Optional[Path]:
        """Convert *source* into the workspace catalog and register it.

        *delete_source* removes the mapping file after the catalog is
        written; only the generated temp file should be deleted.
        """
        if not self.fs.exists(source):
            self.prompter.show_error("Catalog XML file doesn't exists")
            return None

        # Raw bytes so the mapping's own encoding declaration is honoured.
        catalog_xml = convert_mapping(self.fs.read_bytes(source), source)
        self.fs.write_text(self.catalog_path, catalog_xml)
        logger.info("Catalog written: %s", self.catalog_path)

        if delete_source:
            try:
                self.fs.delete(source)
            except OSError as e:
                logger.warning("Could not delete temporary mapping %s: %s", source, e)

        self._register_catalog()
        return self.catalog_path

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _check_xml_extension(self) -> bool:
        installed = bool(self.extensions.get_extension(self.settings.xml_extension_id))
        logger.debug("XML extension %s installed: %s", self.settings.xml_extension_id, installed)
        return installed

    def _install_xml_extension(self) -> None:
        try:
            output = self.extensions.install_extension(self.settings.xml_extension_id)
            self.prompter.show_information(output, modal=True)
            self._xml_extension_installed = self._check_xml_extension()
        except ExtensionInstallError as e:
            logger.warning("XML extension install failed: %s", e)
            self.prompter.show_information(
                "Error while installing Redhat XML extension, you can try to install it manually.",
                modal=True,
            )

    def _execute_and_wait(self, task: TaskSpec) -> TaskEndEvent:
        """Submit *task* and block until that execution ends.

        The end listener is matched by execution identity and removed on
        its first match. The submit lock makes a task that finishes before
        ``execute_task`` returns still match.
        """
        submit_lock = threading.Lock()
        finished = threading.Event()
        state: Dict[str, object] = {}

        def on_end(event: TaskEndEvent) -> None:
            with submit_lock:
                execution: Optional[TaskExecution] = state.get("execution")  # type: ignore[assignment]
                if execution is None or event.execution is not execution:
                    return
            subscription.dispose()
            state["event"] = event
            finished.set()

        with submit_lock:
            subscription = self.task_runner.on_did_end_task(on_end)
            try:
                state["execution"] = self.task_runner.execute_task(task)
            except Exception as e:
                subscription.dispose()
                logger.error("Task submission failed: %s", task.name, exc_info=True)
                raise TaskExecutionError(task.name, cause=e) from e

        finished.wait()
        end_event: TaskEndEvent = state["event"]  # type: ignore[assignment]
        logger.debug("Task %s finished with exit code %s", task.name, end_event.exit_code)
        return end_event

    def _register_catalog(self) -> None:
        key = self.settings.catalogs_setting_key
        catalog_path = str(self.catalog_path)

        # Settings are only read when they will be written back.
        if not self._xml_extension_installed:
            self.prompter.show_information(
                f"XML catalog file was generated ({catalog_path}), you should install XML "
                "extension and add catalog file to it manually",
                modal=True,
            )
            return

        catalogs = list(self.configuration.get(key, []) or [])
        catalogs = [catalog for catalog in catalogs if catalog != catalog_path]
        catalogs.append(catalog_path)

        self.configuration.update(key, catalogs, ConfigurationTarget.WORKSPACE)
        self.prompter.show_information(
            f"Path to the generated XML catalog file ({catalog_path}) was added to the XML "
            "extension configuration. Now you can enjoy Intellisense in Magento 2 XML configs.",
            modal=True,
        )


def build_catalog_command(workspace: WorkspaceFolder, prompter: Prompter,
                          settings: Optional[CatalogSettings] = None) -> CatalogCommand:
    """Wire a :class:`CatalogCommand` to the local host adapters."""
    settings = settings or CatalogSettings()
    return CatalogCommand(
        workspace,
        prompter=prompter,
        file_system=LocalFileSystem(),
        configuration=WorkspaceSettingsStore(settings.storage_path(workspace) / settings.settings_file_name),
        task_runner=SubprocessTaskRunner(),
        extensions=EditorCliExtensionHost(settings.editor_command),
        settings=settings,
    )
