from pathlib import Path

from textvault.buffer import EditError, TextEditor
from textvault.storage import read_lines, write_lines


def write_sample(tmp_path: Path, content: str = "Line 1\nLine 2\nLine 3") -> Path:
    path = tmp_path / "sample.txt"
    path.write_text(content, encoding="utf-8")
    return path


def test_read_lines_splits_on_newline_only(tmp_path: Path) -> None:
    path = write_sample(tmp_path, "a\r\nb\nc\n")

    assert read_lines(path) == ["a\r", "b", "c"]


def test_write_lines_terminates_every_line(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"

    count = write_lines(path, ["x", "", "y"])

    assert count == 3
    assert path.read_bytes() == b"x\n\ny\n"


def test_load_file_replaces_content_and_is_clean(tmp_path: Path) -> None:
    path = write_sample(tmp_path)
    editor = TextEditor.from_lines(["old"])

    result = editor.load_file(path)

    assert result.ok
    assert editor.lines == ("Line 1", "Line 2", "Line 3")
    assert editor.dirty is False
    assert editor.path == str(path)


def test_load_can_be_undone(tmp_path: Path) -> None:
    path = write_sample(tmp_path)
    editor = TextEditor.from_lines(["old"])
    editor.load_file(path)

    assert editor.undo()
    assert editor.lines == ("old",)


def test_load_missing_file_leaves_editor_untouched(tmp_path: Path) -> None:
    editor = TextEditor.from_lines(["keep"])

    result = editor.load_file(tmp_path / "nonexistent.txt")

    assert result.error is EditError.IO_ERROR
    assert editor.lines == ("keep",)
    assert editor.history.undo_depth == 0
    assert editor.path is None


def test_save_without_path_fails() -> None:
    editor = TextEditor.from_lines(["text"])

    result = editor.save_file()

    assert result.error is EditError.NO_FILE_PATH


def test_save_clears_dirty_and_remembers_path(tmp_path: Path) -> None:
    path = write_sample(tmp_path)
    editor = TextEditor()
    editor.load_file(path)
    editor.insert("Line 4")
    assert editor.dirty

    assert editor.save_file()

    assert editor.dirty is False
    assert path.read_text(encoding="utf-8") == "Line 1\nLine 2\nLine 3\nLine 4\n"


def test_save_as_new_file(tmp_path: Path) -> None:
    editor = TextEditor.from_lines(["only"])
    target = tmp_path / "new_file.txt"

    result = editor.save_file(target)

    assert result.ok
    assert target.exists()
    assert editor.path == str(target)


def test_save_into_missing_directory_reports_io_error(tmp_path: Path) -> None:
    editor = TextEditor.from_lines(["only"])
    editor.insert("more")

    result = editor.save_file(tmp_path / "missing" / "file.txt")

    assert result.error is EditError.IO_ERROR
    assert editor.dirty is True


def test_encrypted_file_survives_save_and_load(tmp_path: Path) -> None:
    target = tmp_path / "vault.txt"
    editor = TextEditor.from_lines(["dear diary", "nothing happened"])
    editor.encrypt("pw")
    editor.save_file(target)

    reopened = TextEditor()
    reopened.load_file(target)

    assert reopened.decrypt("pw")
    assert reopened.lines == ("dear diary", "nothing happened")


def test_encrypted_line_ending_in_carriage_return_survives(tmp_path: Path) -> None:
    # "u" ^ "x" is "\r", so the ciphertext of "au" ends in a carriage return.
    target = tmp_path / "vault.txt"
    editor = TextEditor.from_lines(["au"])
    editor.encrypt("x")
    assert editor.lines == ("P\r",)
    editor.save_file(target)

    reopened = TextEditor()
    reopened.load_file(target)

    assert reopened.lines == ("P\r",)
    assert reopened.decrypt("x")
    assert reopened.lines == ("au",)


def test_non_utf8_ciphertext_survives_save_and_load(tmp_path: Path) -> None:
    target = tmp_path / "vault.txt"
    editor = TextEditor.from_lines(["Привет"])
    editor.encrypt("k")
    editor.save_file(target)

    reopened = TextEditor()
    assert reopened.load_file(target)

    assert target.read_bytes()[:2] == b"\xe1\xf4"
    assert reopened.decrypt("k")
    assert reopened.lines == ("Привет",)
