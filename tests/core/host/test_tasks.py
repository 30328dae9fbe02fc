import logging
import sys
import threading

import pytest

from urn_catalog_toolkit.core.host.tasks import MagentoTaskProvider, SubprocessTaskRunner
from urn_catalog_toolkit.core.models import CatalogSettings, TaskSpec, WorkspaceFolder


def _wait_for_end(runner, spec):
    done = threading.Event()
    events = []

    def listener(event):
        events.append(event)
        done.set()

    subscription = runner.on_did_end_task(listener)
    execution = runner.execute_task(spec)
    assert done.wait(timeout=30)
    subscription.dispose()
    return execution, events


class TestMagentoTaskProvider:

    def test_task_runs_bin_magento_in_project(self, tmp_path):
        provider = MagentoTaskProvider(WorkspaceFolder(tmp_path), CatalogSettings())
        task = provider.get_task("dev:urn-catalog:generate", ["/tmp/out.xml"])

        assert task.name == "dev:urn-catalog:generate"
        assert task.cwd == tmp_path
        assert task.argv == ("php", "bin/magento", "dev:urn-catalog:generate", "/tmp/out.xml")

    def test_command_comes_from_settings(self, tmp_path):
        settings = CatalogSettings(magento_command=("bin/magento",))
        task = MagentoTaskProvider(WorkspaceFolder(tmp_path), settings).get_task("cache:flush")
        assert task.argv == ("bin/magento", "cache:flush")


class TestSubprocessTaskRunner:

    def test_end_event_carries_execution_and_exit_code(self, tmp_path):
        runner = SubprocessTaskRunner()
        spec = TaskSpec(name="exit3", command=(sys.executable, "-c", "import sys; sys.exit(3)"), cwd=tmp_path)

        execution, events = _wait_for_end(runner, spec)

        assert len(events) == 1
        assert events[0].execution is execution
        assert events[0].exit_code == 3

    def test_process_runs_in_task_cwd(self, tmp_path):
        runner = SubprocessTaskRunner()
        spec = TaskSpec(
            name="touch",
            command=(sys.executable, "-c", "open('marker.txt', 'w').write('ok')"),
            cwd=tmp_path,
        )

        _wait_for_end(runner, spec)

        assert (tmp_path / "marker.txt").read_text() == "ok"

    def test_output_is_logged(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        runner = SubprocessTaskRunner()
        spec = TaskSpec(name="hello", command=(sys.executable, "-c", "print('generated catalog')"), cwd=tmp_path)

        _wait_for_end(runner, spec)

        assert "[hello] generated catalog" in caplog.text

    def test_missing_executable_raises_on_submit(self, tmp_path):
        runner = SubprocessTaskRunner()
        spec = TaskSpec(name="missing", command=(str(tmp_path / "no-such-binary"),), cwd=tmp_path)
        with pytest.raises(OSError):
            runner.execute_task(spec)

    def test_undecodable_output_still_ends_task(self, tmp_path, caplog):
        caplog.set_level(logging.INFO)
        runner = SubprocessTaskRunner()
        spec = TaskSpec(
            name="latin",
            command=(sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'caf\\xe9 \\xff\\n')"),
            cwd=tmp_path,
        )

        execution, events = _wait_for_end(runner, spec)

        assert events[0].execution is execution
        assert events[0].exit_code == 0
        assert "[latin] caf" in caplog.text
