"""Serial links to the gripper and the factory that configures them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import timedelta
from typing import Any

import serial

from robotiq_gripper.info import HardwareInfo

_LOGGER = logging.getLogger(__name__)

USB_PORT_PARAM = "COM_port"
USB_PORT_DEFAULT = "/dev/ttyUSB0"
BAUDRATE_PARAM = "baudrate"
BAUDRATE_DEFAULT = 115200
TIMEOUT_PARAM = "timeout"
TIMEOUT_DEFAULT = 0.5


class SerialIOError(OSError):
    """Raised when a read or write moves fewer bytes than requested."""


class Serial(ABC):
    """A byte-oriented link to the gripper.

    The driver talks to the hardware only through this interface, so a
    replacement can check that high-level commands become the right bytes.
    """

    @abstractmethod
    def open(self) -> None:
        """Open the port if it is set and not already open."""

    @abstractmethod
    def is_open(self) -> bool:
        """Return True if the port is open."""

    @abstractmethod
    def close(self) -> None:
        """Close the port."""

    @abstractmethod
    def read(self, size: int = 1) -> bytes:
        """Read exactly ``size`` bytes, raising SerialIOError otherwise."""

    @abstractmethod
    def write(self, data: Iterable[int] | bytes) -> None:
        """Write all of ``data``, raising SerialIOError otherwise."""

    @property
    @abstractmethod
    def port(self) -> str:
        """The serial port identifier, such as ``/dev/ttyS0`` or ``COM1``."""

    @port.setter
    @abstractmethod
    def port(self, value: str) -> None: ...

    @property
    @abstractmethod
    def timeout(self) -> timedelta:
        """The read and write timeout, with millisecond resolution."""

    @timeout.setter
    @abstractmethod
    def timeout(self, value: timedelta) -> None: ...

    @property
    @abstractmethod
    def baudrate(self) -> int:
        """The baud rate of the port."""

    @baudrate.setter
    @abstractmethod
    def baudrate(self, value: int) -> None: ...


class DefaultSerial(Serial):
    """A Serial backed by a pyserial port.

    ``device`` may be any pyserial-compatible object; a new, unopened
    ``serial.Serial`` is used when it is omitted.
    """

    def __init__(self, device: Any = None) -> None:
        self._device = device if device is not None else serial.Serial()

    def open(self) -> None:
        self._device.open()

    def is_open(self) -> bool:
        return bool(self._device.is_open)

    def close(self) -> None:
        self._device.close()

    def read(self, size: int = 1) -> bytes:
        data = bytes(self._device.read(size))
        if len(data) != size:
            raise SerialIOError(f"Requested {size} bytes, but got {len(data)}")
        return data

    def write(self, data: Iterable[int] | bytes) -> None:
        payload = bytes(data)
        written = self._device.write(payload)
        self._device.flush()
        if written is None:
            written = 0
        if written != len(payload):
            raise SerialIOError(
                f"Attempted to write {len(payload)} bytes, but wrote {written}"
            )

    @property
    def port(self) -> str:
        return self._device.port or ""

    @port.setter
    def port(self, value: str) -> None:
        self._device.port = value

    @property
    def timeout(self) -> timedelta:
        seconds = self._device.timeout
        if seconds is None:
            return timedelta(0)
        return timedelta(milliseconds=round(seconds * 1000))

    @timeout.setter
    def timeout(self, value: timedelta) -> None:
        milliseconds = int(value / timedelta(milliseconds=1))
        seconds = milliseconds / 1000
        self._device.timeout = seconds
        self._device.write_timeout = seconds

    @property
    def baudrate(self) -> int:
        return int(self._device.baudrate)

    @baudrate.setter
    def baudrate(self, value: int) -> None:
        self._device.baudrate = value


class SerialFactory(ABC):
    """Creates and configures a Serial from hardware parameters."""

    @abstractmethod
    def create(self, info: HardwareInfo) -> Serial:
        """Return a configured Serial for the given hardware."""


class DefaultSerialFactory(SerialFactory):
    """Builds a DefaultSerial from the port, baudrate and timeout parameters."""

    def create(self, info: HardwareInfo) -> Serial:
        _LOGGER.info("Reading %s...", USB_PORT_PARAM)
        usb_port = info.parameter(USB_PORT_PARAM, USB_PORT_DEFAULT)
        _LOGGER.info("%s: %s", USB_PORT_PARAM, usb_port)

        _LOGGER.info("Reading %s...", BAUDRATE_PARAM)
        raw_baudrate = info.parameter(BAUDRATE_PARAM)
        baudrate = BAUDRATE_DEFAULT if raw_baudrate is None else int(raw_baudrate)
        if baudrate < 0:
            raise ValueError(f"Invalid baudrate: {raw_baudrate!r}")
        _LOGGER.info("%s: %dbps", BAUDRATE_PARAM, baudrate)

        _LOGGER.info("Reading %s...", TIMEOUT_PARAM)
        raw_timeout = info.parameter(TIMEOUT_PARAM)
        timeout = TIMEOUT_DEFAULT if raw_timeout is None else float(raw_timeout)
        _LOGGER.info("%s: %fs", TIMEOUT_PARAM, timeout)

        link = self.create_serial()
        link.port = usb_port
        link.baudrate = baudrate
        link.timeout = timedelta(milliseconds=int(timeout * 1000))
        return link

    def create_serial(self) -> Serial:
        """Return the unconfigured Serial to set up; override in tests."""
        return DefaultSerial()