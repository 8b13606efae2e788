import pytest

from engineone.text import bytes_equal, concatenate, copy_bytes


def test_equal_identical():
    assert bytes_equal(b"workspace", b"workspace") is True


def test_unequal_same_length():
    assert bytes_equal(b"abc", b"abd") is False


def test_unequal_length():
    assert bytes_equal(b"abc", b"abcd") is False


def test_equal_stops_at_nul():
    assert bytes_equal(b"a\0b", b"a\0c") is True


def test_nul_position_matters():
    assert bytes_equal(b"ab\0", b"a\0b") is False


def test_equal_accepts_str_and_bytes():
    assert bytes_equal("lua", b"lua") is True


def test_equal_empty():
    assert bytes_equal(b"", b"") is True


def test_copy_round_trip():
    assert copy_bytes(b"smain.lua") == b"smain.lua"


def test_copy_truncates_at_nul():
    assert copy_bytes(b"abc\0def") == b"abc"


def test_copy_is_independent():
    source = bytearray(b"game")
    copied = copy_bytes(source)
    source[0] = ord("x")
    assert copied == b"game"


def test_copy_encodes_text():
    text = "h\u00e9llo"
    assert copy_bytes(text) == text.encode("utf-8")


def test_copy_rejects_non_bytes():
    with pytest.raises(TypeError):
        copy_bytes(42)


def test_concatenate_path():
    assert concatenate(b"/tmp/ws", "/", b"game") == b"/tmp/ws/game"


def test_concatenate_nothing():
    assert concatenate() == b""


def test_concatenate_length_invariant():
    parts = [b"ab", b"", b"cde", bytearray(b"f")]
    result = concatenate(*parts)
    assert len(result) == sum(len(p) for p in parts)
    assert result.startswith(b"ab") and result.endswith(b"f")


def test_concatenate_keeps_empty_right():
    assert concatenate(b"left", b"") == b"left"


def test_concatenate_rejects_non_bytes():
    with pytest.raises(TypeError):
        concatenate(b"a", None)