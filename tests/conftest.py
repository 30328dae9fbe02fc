"""Test configuration and fixtures for URN Catalog Toolkit.

Host fakes live in ``tests/fakes.py``; the fixtures here wire them into a
:class:`CatalogCommand` rooted at a temporary project folder.
"""

import logging
import sys
from pathlib import Path
from typing import Callable

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from urn_catalog_toolkit.core.host.filesystem import LocalFileSystem
from urn_catalog_toolkit.core.models import CatalogSettings, TaskSpec, WorkspaceFolder
from urn_catalog_toolkit.core.services import CatalogCommand
from tests.fakes import (
    SAMPLE_MAPPING,
    FakeConfigurationStore,
    FakeExtensionHost,
    FakePrompter,
    FakeTaskRunner,
)

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    project = tmp_path / "magento"
    project.mkdir()
    return project


@pytest.fixture
def workspace(project_dir) -> WorkspaceFolder:
    return WorkspaceFolder(project_dir)


@pytest.fixture
def settings() -> CatalogSettings:
    return CatalogSettings()


@pytest.fixture
def write_mapping() -> Callable[[TaskSpec], None]:
    """Task action that behaves like ``bin/magento dev:urn-catalog:generate``."""
    def _write(task: TaskSpec) -> None:
        Path(task.args[-1]).write_text(SAMPLE_MAPPING, encoding="utf-8")
    return _write


@pytest.fixture
def make_command(workspace, settings):
    """Factory building a CatalogCommand wired to fakes."""
    def _make(prompter=None, configuration=None, task_runner=None, extensions=None,
              file_system=None) -> CatalogCommand:
        return CatalogCommand(
            workspace,
            prompter=prompter or FakePrompter(),
            file_system=file_system or LocalFileSystem(),
            configuration=configuration or FakeConfigurationStore(),
            task_runner=task_runner or FakeTaskRunner(),
            extensions=extensions or FakeExtensionHost(),
            settings=settings,
        )
    return _make
