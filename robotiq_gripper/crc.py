"""CRC-16/MODBUS checksum as used on the gripper's serial link."""

from __future__ import annotations

from collections.abc import Iterable

_POLYNOMIAL = 0xA001


def _build_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            crc = (crc >> 1) ^ _POLYNOMIAL if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def compute_crc(data: Iterable[int] | bytes) -> int:
    """Return the 16-bit MODBUS CRC of ``data``.

    The result is arranged so that its most significant byte is the one sent
    first on the wire: appending ``crc >> 8`` and then ``crc & 0xFF`` to the
    message yields a valid MODBUS RTU frame.

    Raises ValueError if any item is not a byte value (0..255).
    """
    crc = 0xFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]
    return ((crc & 0xFF) << 8) | (crc >> 8)