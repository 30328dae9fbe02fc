import io
from pathlib import Path

from urn_catalog_toolkit.ui.console import ConsolePrompter


def _prompter(*answers):
    replies = list(answers)

    def fake_input(_prompt):
        if not replies:
            raise EOFError
        return replies.pop(0)

    out = io.StringIO()
    return ConsolePrompter(input_func=fake_input, out=out), out


def test_numbered_choice_returns_button():
    prompter, out = _prompter("2")
    assert prompter.show_information("Continue?", "Generate", "Existing") == "Existing"
    assert "  1) Generate" in out.getvalue()
    assert "  2) Existing" in out.getvalue()


def test_empty_or_invalid_answer_cancels():
    assert _prompter("")[0].show_information("Continue?", "Generate") is None
    assert _prompter("7")[0].show_information("Continue?", "Generate") is None
    assert _prompter("abc")[0].show_information("Continue?", "Generate") is None


def test_end_of_input_cancels():
    assert _prompter()[0].show_information("Continue?", "Generate") is None


def test_plain_message_prints_without_prompting():
    prompter, out = _prompter()
    assert prompter.show_information("Done") is None
    assert out.getvalue() == "Done\n"


def test_pick_files_resolves_relative_paths(tmp_path):
    prompter, _out = _prompter("dev/urn.xml")
    assert prompter.pick_files(tmp_path, {"Magento XML Catalog": ["xml"]}) == [tmp_path / "dev" / "urn.xml"]


def test_pick_files_rejects_other_extensions(tmp_path):
    prompter, out = _prompter("notes.txt")
    assert prompter.pick_files(tmp_path, {"Magento XML Catalog": ["xml"]}) == []
    assert "ERROR: Expected one of .xml" in out.getvalue()


def test_pick_files_empty_answer_cancels(tmp_path):
    prompter, _out = _prompter("")
    assert prompter.pick_files(tmp_path, {"Magento XML Catalog": ["xml"]}) == []


def test_absolute_path_is_kept(tmp_path):
    target = tmp_path / "elsewhere" / "urn.XML"
    prompter, _out = _prompter(str(target))
    assert prompter.pick_files(Path("/ignored"), {"Magento XML Catalog": ["xml"]}) == [target]
