"""Helpers for formatting bytes and splitting 16-bit register values."""

from __future__ import annotations

from collections.abc import Iterable


def _check_range(value: int, limit: int, kind: str) -> int:
    if not 0 <= value <= limit:
        raise ValueError(f"{value} is not a valid {kind} (0..{limit})")
    return value


def bytes_to_hex(values: Iterable[int] | bytes) -> str:
    """Format bytes as space-separated two-digit upper-case hex numbers."""
    return " ".join(f"{byte:02X}" for byte in bytes(values))


def words_to_hex(values: Iterable[int]) -> str:
    """Format 16-bit words as space-separated four-digit upper-case hex numbers."""
    return " ".join(
        f"{_check_range(word, 0xFFFF, '16-bit word'):04X}" for word in values
    )


def to_binary_string(byte: int) -> str:
    """Return the eight-character binary representation of a byte."""
    return format(_check_range(byte, 0xFF, "byte"), "08b")


def get_msb(value: int) -> int:
    """Return the most significant byte of a 16-bit value."""
    return _check_range(value, 0xFFFF, "16-bit word") >> 8


def get_lsb(value: int) -> int:
    """Return the least significant byte of a 16-bit value."""
    return _check_range(value, 0xFFFF, "16-bit word") & 0xFF