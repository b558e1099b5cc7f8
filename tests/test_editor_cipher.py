from textvault.buffer import EditError, TextEditor


def make_editor(*lines: str) -> TextEditor:
    return TextEditor.from_lines(lines)


def test_encrypt_then_decrypt_round_trip() -> None:
    original = ("Hello, World!", "second line", "")
    editor = make_editor(*original)

    assert editor.encrypt("secret")
    assert editor.lines != original
    assert editor.lines[2] == ""
    assert editor.dirty is True

    assert editor.decrypt("secret")
    assert editor.lines == original


def test_round_trip_with_non_ascii_text() -> None:
    original = ("Привет мир", "naïve café")
    editor = make_editor(*original)

    editor.encrypt("пароль")
    assert editor.decrypt("пароль")

    assert editor.lines == original


def test_encrypt_is_undoable() -> None:
    editor = make_editor("plain")
    editor.encrypt("k")

    assert editor.undo()
    assert editor.lines == ("plain",)


def test_empty_password_is_rejected_without_snapshot() -> None:
    editor = make_editor("plain")

    encrypted = editor.encrypt("")
    decrypted = editor.decrypt("")

    assert encrypted.error is EditError.EMPTY_PASSWORD
    assert decrypted.error is EditError.EMPTY_PASSWORD
    assert editor.lines == ("plain",)
    assert editor.history.undo_depth == 0
    assert editor.dirty is False


def test_wrong_password_is_rejected_and_state_kept() -> None:
    # "A" and " " differ by 0x20 ^ 0x41 == 0x61, so the second character of
    # "aaaa" decrypts to NUL under the wrong password.
    editor = make_editor("aaaa")
    editor.encrypt("A")
    encrypted = editor.lines
    depth = editor.history.undo_depth

    result = editor.decrypt(" ")

    assert not result
    assert result.error is EditError.DECRYPTION_VERIFICATION_FAILED
    assert editor.lines == encrypted
    assert editor.history.undo_depth == depth


def test_failed_decrypt_preserves_redo_chain() -> None:
    editor = make_editor("aaaa")
    editor.encrypt("A")
    editor.insert("x")
    editor.undo()

    assert not editor.decrypt(" ")

    assert editor.history.redo_depth == 1
    assert editor.redo()
    assert editor.lines[-1] == "x"


def test_wrong_password_never_corrupts_buffer() -> None:
    original = ("The quick brown fox", "jumps over the lazy dog")
    for wrong in ("x", "wrong", "secreT", "another password"):
        editor = make_editor(*original)
        editor.encrypt("secret")
        encrypted = editor.lines

        result = editor.decrypt(wrong)

        if result:
            assert len(editor.lines) == len(original)
            assert all(line.isprintable() for line in editor.lines)
        else:
            assert editor.lines == encrypted


def test_password_buffer_is_scrubbed() -> None:
    editor = make_editor("some text")
    password = bytearray(b"secret")

    editor.encrypt(password)

    assert password == bytearray()
    assert editor.decrypt("secret")
    assert editor.lines == ("some text",)
