import pytest

from textvault.cipher import (
    Secret,
    combine,
    derive_keystream,
    display_text,
    is_printable,
    line_bytes,
    transform_line,
)


def test_keystream_matches_block_layout() -> None:
    assert derive_keystream("ab", 7) == b"2ab4ab6"
    assert derive_keystream("key", 10) == b"3key6key9k"


@pytest.mark.parametrize("length", [1, 2, 5, 17, 64, 301])
def test_keystream_has_exact_length(length: int) -> None:
    assert len(derive_keystream("password", length)) == length


def test_keystream_empty_inputs() -> None:
    assert derive_keystream("", 12) == b""
    assert derive_keystream("secret", 0) == b""
    assert derive_keystream("secret", -3) == b""


def test_keystream_is_deterministic_and_password_specific() -> None:
    assert derive_keystream("abc", 32) == derive_keystream("abc", 32)
    assert derive_keystream("abc", 32) != derive_keystream("abd", 32)


def test_keystream_accepts_byte_buffers_without_consuming_them() -> None:
    buffer = bytearray(b"ab")

    assert derive_keystream(buffer, 7) == b"2ab4ab6"
    assert derive_keystream(Secret("ab"), 7) == b"2ab4ab6"
    assert buffer == bytearray(b"ab")


def test_keystream_uses_utf8_password_length() -> None:
    # "é" is two UTF-8 bytes, so the first block starts with "2".
    assert derive_keystream("é", 3) == b"2" + "é".encode("utf-8")


def test_combine_is_self_inverse() -> None:
    key = derive_keystream("hunter2", 11)
    data = b"hello world"

    assert combine(combine(data, key), key) == data
    assert combine(data, key) != data


def test_combine_cycles_short_keys() -> None:
    assert combine(b"\x00\x00\x00\x00\x00", b"\x01\x02") == b"\x01\x02\x01\x02\x01"


def test_combine_with_empty_key_is_identity() -> None:
    assert combine(b"data", b"") == b"data"
    assert combine(bytearray(b"data"), b"") == b"data"


def test_transform_line_xors_utf8_bytes() -> None:
    # Password "k" gives the keystream "1k2k3k..." over the 12 UTF-8 bytes.
    expected = bytes(
        byte ^ key for byte, key in zip("Привет".encode("utf-8"), b"1k2k3k4k5k6k")
    )

    encrypted = transform_line("Привет", "k")

    assert expected[:2] == b"\xe1\xf4"
    assert line_bytes(encrypted) == expected


def test_transform_line_round_trip_keeps_byte_length() -> None:
    line = "Привет, мир! 123"
    encrypted = transform_line(line, "пароль")

    assert len(line_bytes(encrypted)) == len(line.encode("utf-8"))
    assert encrypted != line
    assert transform_line(encrypted, "пароль") == line


def test_display_text_masks_escaped_bytes() -> None:
    encrypted = transform_line("Привет", "k")

    shown = display_text(encrypted)

    assert "?" in shown
    shown.encode("utf-8")
    assert display_text("plain") == "plain"


def test_is_printable_flags_control_characters() -> None:
    assert is_printable(["plain text", "", "spaces are fine"])
    assert not is_printable(["ok", "nul\x00byte"])
    assert not is_printable(["tab\tseparated"])
    assert not is_printable([transform_line("Привет", "k")])
