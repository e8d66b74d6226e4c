from datetime import timedelta

import pytest
import serial

from robotiq_gripper.info import HardwareInfo
from robotiq_gripper.serial_port import (
    DefaultSerial,
    DefaultSerialFactory,
    Serial,
    SerialFactory,
    SerialIOError,
)


class RecordingSerial(Serial):
    def __init__(self):
        self._port = ""
        self._timeout = timedelta(0)
        self._baudrate = 0
        self._open = False
        self.written = []

    def open(self):
        self._open = True

    def is_open(self):
        return self._open

    def close(self):
        self._open = False

    def read(self, size=1):
        return bytes(size)

    def write(self, data):
        self.written.append(bytes(data))

    @property
    def port(self):
        return self._port

    @port.setter
    def port(self, value):
        self._port = value

    @property
    def timeout(self):
        return self._timeout

    @timeout.setter
    def timeout(self, value):
        self._timeout = value

    @property
    def baudrate(self):
        return self._baudrate

    @baudrate.setter
    def baudrate(self, value):
        self._baudrate = value


class StubSerialFactory(DefaultSerialFactory):
    def __init__(self, link):
        self._link = link

    def create_serial(self):
        return self._link


class ShortWriteDevice:
    def __init__(self):
        self.is_open = True
        self.port = None
        self.timeout = None
        self.write_timeout = None
        self.baudrate = 9600
        self.flushed = False

    def write(self, data):
        return len(data) - 1

    def flush(self):
        self.flushed = True


def loop_device():
    return DefaultSerial(serial.serial_for_url("loop://", do_not_open=True))


def test_factory_with_default_parameters():
    link = RecordingSerial()
    created = StubSerialFactory(link).create(HardwareInfo())
    assert created is link
    assert link.port == "/dev/ttyUSB0"
    assert link.baudrate == 115200
    assert link.timeout == timedelta(milliseconds=500)


def test_factory_with_given_parameters():
    info = HardwareInfo(
        hardware_parameters={
            "COM_port": "/dev/ttyUSB1",
            "baudrate": "9600",
            "timeout": "0.1",
        }
    )
    link = RecordingSerial()
    StubSerialFactory(link).create(info)
    assert link.port == "/dev/ttyUSB1"
    assert link.baudrate == 9600
    assert link.timeout == timedelta(milliseconds=100)


def test_factory_rejects_bad_baudrate():
    info = HardwareInfo(hardware_parameters={"baudrate": "fast"})
    with pytest.raises(ValueError):
        StubSerialFactory(RecordingSerial()).create(info)


def test_factory_rejects_bad_timeout():
    info = HardwareInfo(hardware_parameters={"timeout": "soon"})
    with pytest.raises(ValueError):
        StubSerialFactory(RecordingSerial()).create(info)


def test_default_factory_creates_default_serial():
    created = DefaultSerialFactory().create_serial()
    assert isinstance(created, DefaultSerial)
    assert created.is_open() is False


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Serial()
    with pytest.raises(TypeError):
        SerialFactory()


def test_default_serial_open_and_close():
    link = loop_device()
    assert link.is_open() is False
    link.open()
    assert link.is_open() is True
    link.close()
    assert link.is_open() is False


def test_default_serial_write_then_read_round_trip():
    link = loop_device()
    link.timeout = timedelta(milliseconds=200)
    link.open()
    try:
        link.write([0x09, 0x03, 0x07, 0xD0])
        assert link.read(4) == bytes([0x09, 0x03, 0x07, 0xD0])
    finally:
        link.close()


def test_default_serial_short_read_raises():
    link = loop_device()
    link.timeout = timedelta(milliseconds=50)
    link.open()
    try:
        link.write(b"\x01\x02")
        with pytest.raises(SerialIOError, match="Requested 3 bytes, but got 2"):
            link.read(3)
    finally:
        link.close()


def test_default_serial_short_write_raises():
    device = ShortWriteDevice()
    link = DefaultSerial(device)
    with pytest.raises(SerialIOError, match="Attempted to write 3 bytes, but wrote 2"):
        link.write(b"\x01\x02\x03")
    assert device.flushed is True


def test_serial_io_error_is_os_error():
    with pytest.raises(OSError):
        DefaultSerial(ShortWriteDevice()).write(b"\x00")


def test_default_serial_settings_round_trip():
    device = serial.serial_for_url("loop://", do_not_open=True)
    link = DefaultSerial(device)
    link.timeout = timedelta(milliseconds=250)
    link.baudrate = 9600
    link.port = "loop://"
    assert link.timeout == timedelta(milliseconds=250)
    assert device.timeout == pytest.approx(0.25)
    assert device.write_timeout == pytest.approx(0.25)
    assert link.baudrate == 9600
    assert link.port == "loop://"


def test_default_serial_without_timeout_reports_zero():
    device = ShortWriteDevice()
    assert DefaultSerial(device).timeout == timedelta(0)