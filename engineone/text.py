"""Byte-string helpers with C-string comparison and copy semantics."""

from __future__ import annotations

from typing import Union

__all__ = ["bytes_equal", "copy_bytes", "concatenate"]

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected bytes-like or str, got {type(value).__name__}")


def _terminated(data: bytes) -> bytes:
    """Return ``data`` up to, not including, its first NUL byte."""
    head, _, _ = data.partition(b"\0")
    return head


def bytes_equal(left: BytesLike, right: BytesLike) -> bool:
    """Compare two byte strings.

    Strings of different lengths are never equal. Strings of the same length
    are compared the way a C string comparison bounded by that length would:
    the comparison stops at the first NUL byte.
    """
    left_bytes = _as_bytes(left)
    right_bytes = _as_bytes(right)
    if len(left_bytes) != len(right_bytes):
        return False
    return _terminated(left_bytes) == _terminated(right_bytes)


def copy_bytes(data: BytesLike) -> bytes:
    """Return an independent copy of a NUL-terminated byte string.

    Anything from the first NUL byte onwards is not copied.
    """
    return _terminated(_as_bytes(data))


def concatenate(*args: BytesLike) -> bytes:
    """Join any number of byte strings (or UTF-8 text) into one new byte string."""
    return b"".join(_as_bytes(piece) for piece in args)