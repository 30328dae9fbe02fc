"""End-to-end runs of the catalog command against real host adapters.

``bin/magento`` is replaced by a small Python script so the subprocess task
runner, the workspace settings file and the file system are all exercised.
"""

import json
import sys
import textwrap

import pytest

from urn_catalog_toolkit.app import run_command
from urn_catalog_toolkit.core.catalog import CATALOG_NAMESPACE
from urn_catalog_toolkit.core.host import LocalFileSystem, SubprocessTaskRunner, WorkspaceSettingsStore
from urn_catalog_toolkit.core.models import CatalogSettings, WorkspaceFolder
from urn_catalog_toolkit.core.services import CatalogCommand
from tests.fakes import SAMPLE_MAPPING, FakeExtensionHost, FakePrompter

FAKE_MAGENTO = textwrap.dedent('''
    import sys
    from pathlib import Path

    MAPPING = {mapping!r}

    if sys.argv[1] != "dev:urn-catalog:generate":
        sys.exit(2)
    Path(sys.argv[2]).write_text(MAPPING, encoding="utf-8")
    print("Catalog written to " + sys.argv[2])
''')


@pytest.fixture
def magento_project(project_dir):
    bin_dir = project_dir / "bin"
    bin_dir.mkdir()
    (bin_dir / "magento").write_text(FAKE_MAGENTO.format(mapping=SAMPLE_MAPPING), encoding="utf-8")
    return project_dir


@pytest.fixture
def python_settings():
    return CatalogSettings(magento_command=(sys.executable, "bin/magento"))


def _command(project, settings, prompter, extensions):
    workspace = WorkspaceFolder(project)
    return CatalogCommand(
        workspace,
        prompter=prompter,
        file_system=LocalFileSystem(),
        configuration=WorkspaceSettingsStore(settings.storage_path(workspace) / settings.settings_file_name),
        task_runner=SubprocessTaskRunner(),
        extensions=extensions,
        settings=settings,
    )


@pytest.mark.integration
class TestGenerateEndToEnd:

    def test_generated_catalog_is_written_and_registered(self, magento_project, python_settings):
        settings_file = magento_project / ".vscode" / "settings.json"
        settings_file.parent.mkdir()
        settings_file.write_text(json.dumps({"files.eol": "\n", "xml.catalogs": ["/other/catalog.xml"]}))
        prompter = FakePrompter(responses=[CatalogCommand.GENERATE_BUTTON])

        result = _command(magento_project, python_settings, prompter, FakeExtensionHost(installed=True)).run()

        catalog_path = magento_project / ".vscode" / "catalog.xml"
        assert result == catalog_path
        text = catalog_path.read_text(encoding="utf-8")
        assert text.startswith('<?xml version="1.0"?>\n')
        assert f'<catalog xmlns="{CATALOG_NAMESPACE}">' in text
        assert text.count("<system ") == 3
        assert not (magento_project / ".vscode" / "catalog_tmp.xml").exists()

        data = json.loads(settings_file.read_text(encoding="utf-8"))
        assert data["files.eol"] == "\n"
        assert data["xml.catalogs"] == ["/other/catalog.xml", str(catalog_path)]

    def test_rerun_keeps_single_registration(self, magento_project, python_settings):
        for _ in range(2):
            prompter = FakePrompter(responses=[CatalogCommand.GENERATE_BUTTON])
            _command(magento_project, python_settings, prompter, FakeExtensionHost(installed=True)).run()

        data = json.loads((magento_project / ".vscode" / "settings.json").read_text(encoding="utf-8"))
        assert data["xml.catalogs"] == [str(magento_project / ".vscode" / "catalog.xml")]

    def test_failing_build_tool_reports_missing_file(self, project_dir, python_settings):
        bin_dir = project_dir / "bin"
        bin_dir.mkdir()
        (bin_dir / "magento").write_text("import sys\nsys.exit(1)\n", encoding="utf-8")
        prompter = FakePrompter(responses=[CatalogCommand.GENERATE_BUTTON])

        result = _command(project_dir, python_settings, prompter, FakeExtensionHost(installed=True)).run()

        assert result is None
        assert prompter.errors == ["Catalog XML was not generated by bin/magento"]
        assert not (project_dir / ".vscode" / "settings.json").exists()


@pytest.mark.integration
class TestRunCommand:

    def test_missing_build_tool_exits_with_error(self, project_dir, monkeypatch):
        settings = CatalogSettings(magento_command=(str(project_dir / "no-such-php"), "bin/magento"))
        prompter = FakePrompter(responses=[CatalogCommand.GENERATE_BUTTON])
        monkeypatch.setattr(
            "urn_catalog_toolkit.core.services.catalog_service.EditorCliExtensionHost",
            lambda *_args, **_kwargs: FakeExtensionHost(installed=True),
        )

        assert run_command(project_dir, prompter, settings) == 1
        assert prompter.errors == ["Error executing dev:urn-catalog:generate"]

    def test_cancel_exits_cleanly(self, project_dir, monkeypatch):
        monkeypatch.setattr(
            "urn_catalog_toolkit.core.services.catalog_service.EditorCliExtensionHost",
            lambda *_args, **_kwargs: FakeExtensionHost(installed=False),
        )
        prompter = FakePrompter(responses=[None])

        assert run_command(project_dir, prompter, CatalogSettings()) == 0
        assert not (project_dir / ".vscode").exists()
