import pytest

from textvault.cipher import Secret, scoped_secret, securely_clear


class RecordingBuffer(bytearray):
    def __init__(self, *args) -> None:
        super().__init__(*args)
        self.writes: list[tuple[int, int]] = []

    def __setitem__(self, index, value) -> None:
        self.writes.append((index, value))
        super().__setitem__(index, value)


def test_securely_clear_zeroes_every_byte_before_emptying() -> None:
    buffer = RecordingBuffer(b"abc")

    securely_clear(buffer)

    assert buffer.writes == [(0, 0), (1, 0), (2, 0)]
    assert len(buffer) == 0


def test_secret_clear() -> None:
    secret = Secret("hunter2")
    assert len(secret) == 7
    assert secret

    secret.clear()

    assert secret.cleared
    assert not secret


def test_secret_repr_hides_content() -> None:
    assert "hunter2" not in repr(Secret("hunter2"))


def test_secret_rejects_unsupported_types() -> None:
    with pytest.raises(TypeError):
        Secret(1234)  # type: ignore[arg-type]


def test_scoped_secret_scrubs_caller_buffer() -> None:
    buffer = bytearray(b"topsecret")

    with scoped_secret(buffer) as secret:
        assert len(secret) == 9

    assert buffer == bytearray()


def test_scoped_secret_scrubs_on_error() -> None:
    buffer = bytearray(b"topsecret")

    with pytest.raises(RuntimeError):
        with scoped_secret(buffer):
            raise RuntimeError("boom")

    assert buffer == bytearray()


def test_secret_copies_immutable_sources() -> None:
    raw = b"abc"
    secret = Secret(raw)
    secret.clear()

    assert raw == b"abc"
