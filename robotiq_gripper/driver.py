"""Gripper driver interface and its MODBUS RTU serial implementation."""

from __future__ import annotations

import enum
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable

from robotiq_gripper.crc import compute_crc
from robotiq_gripper.data_utils import get_lsb, get_msb
from robotiq_gripper.serial_port import Serial, SerialIOError

_LOGGER = logging.getLogger(__name__)

READ_FUNCTION_CODE = 0x03
FIRST_OUTPUT_REGISTER = 0x07D0
NUM_OUTPUT_REGISTERS = 0x0006
# slave ID, function code, byte count, two bytes per register, CRC.
READ_RESPONSE_SIZE = 2 * NUM_OUTPUT_REGISTERS + 5

WRITE_FUNCTION_CODE = 0x10
ACTION_REQUEST_REGISTER = 0x03E8
# slave ID, function code, first register, register count, CRC.
WRITE_RESPONSE_SIZE = 8

RESPONSE_HEADER_SIZE = 3
GRIPPER_STATUS_INDEX = 0
POSITION_INDEX = 4

MAX_RETRIES = 5
DEFAULT_SLAVE_ADDRESS = 0x09
DEFAULT_POLL_INTERVAL = 1.0


class DriverError(Exception):
    """Raised when the driver cannot complete a request to the gripper."""


class ActivationStatus(enum.Enum):
    RESET = enum.auto()
    ACTIVE = enum.auto()


class ActionStatus(enum.Enum):
    STOPPED = enum.auto()
    MOVING = enum.auto()


class GripperStatus(enum.Enum):
    RESET = enum.auto()
    IN_PROGRESS = enum.auto()
    COMPLETED = enum.auto()


class ObjectDetectionStatus(enum.Enum):
    MOVING = enum.auto()
    OBJECT_DETECTED_OPENING = enum.auto()
    OBJECT_DETECTED_CLOSING = enum.auto()
    AT_REQUESTED_POSITION = enum.auto()


_GRIPPER_STATUS_BITS = {
    0x00: GripperStatus.RESET,
    0x01: GripperStatus.IN_PROGRESS,
    0x03: GripperStatus.COMPLETED,
}

_OBJECT_DETECTION_BITS = {
    0x00: ObjectDetectionStatus.MOVING,
    0x01: ObjectDetectionStatus.OBJECT_DETECTED_OPENING,
    0x02: ObjectDetectionStatus.OBJECT_DETECTED_CLOSING,
    0x03: ObjectDetectionStatus.AT_REQUESTED_POSITION,
}


def _check_byte(value: int, what: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be between 0 and 255, got {value}")
    return value


class Driver(ABC):
    """How to communicate with the gripper hardware."""

    @abstractmethod
    def set_slave_address(self, slave_address: int) -> None:
        """Set the MODBUS slave address of the gripper."""

    @abstractmethod
    def connect(self) -> bool:
        """Open the connection; return True if it is open."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection."""

    @abstractmethod
    def activate(self) -> None:
        """Activate the gripper."""

    @abstractmethod
    def deactivate(self) -> None:
        """Deactivate the gripper."""

    @abstractmethod
    def set_gripper_position(self, pos: int) -> None:
        """Move to ``pos``: 0x00 is fully open, 0xFF fully closed."""

    @abstractmethod
    def get_gripper_position(self) -> int:
        """Return the current position, 0x00 (open) to 0xFF (closed)."""

    @abstractmethod
    def gripper_is_moving(self) -> bool:
        """Return True while the gripper is moving."""

    @abstractmethod
    def set_speed(self, speed: int) -> None:
        """Set the speed, 0x00 (stopped) to 0xFF (full speed)."""

    @abstractmethod
    def set_force(self, force: int) -> None:
        """Set the force, 0x00 (none) to 0xFF (maximum)."""


class DefaultDriver(Driver):
    """Talks to the gripper over a Serial link and records its last known state."""

    def __init__(
        self,
        serial: Serial,
        *,
        slave_address: int = DEFAULT_SLAVE_ADDRESS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._serial = serial
        self._slave_address = _check_byte(slave_address, "slave address")
        self._poll_interval = poll_interval
        self._commanded_speed = 0x80
        self._commanded_force = 0x80
        self._activation_status: ActivationStatus | None = None
        self._action_status: ActionStatus | None = None
        self._gripper_status: GripperStatus | None = None
        self._object_detection_status: ObjectDetectionStatus | None = None
        self._gripper_position = 0

    @property
    def slave_address(self) -> int:
        return self._slave_address

    @property
    def speed(self) -> int:
        return self._commanded_speed

    @property
    def force(self) -> int:
        return self._commanded_force

    @property
    def activation_status(self) -> ActivationStatus | None:
        return self._activation_status

    @property
    def action_status(self) -> ActionStatus | None:
        return self._action_status

    @property
    def gripper_status(self) -> GripperStatus | None:
        return self._gripper_status

    @property
    def object_detection_status(self) -> ObjectDetectionStatus | None:
        return self._object_detection_status

    def _send(self, request: bytes, response_size: int, failure: str) -> bytes:
        """Send ``request`` and read the reply, retrying on I/O errors."""
        for attempt in range(1, MAX_RETRIES + 1):
            try:
                self._serial.write(request)
                return self._serial.read(response_size)
            except SerialIOError as error:
                _LOGGER.warning(
                    "Resending the command because the previous attempt "
                    "(%d of %d) failed: %s",
                    attempt,
                    MAX_RETRIES,
                    error,
                )
        _LOGGER.error("Reached maximum retries. Operation failed.")
        raise DriverError(failure)

    def connect(self) -> bool:
        self._serial.open()
        return self._serial.is_open()

    def disconnect(self) -> None:
        self._serial.close()

    def set_slave_address(self, slave_address: int) -> None:
        self._slave_address = _check_byte(slave_address, "slave address")

    def activate(self) -> None:
        _LOGGER.info("Activate...")
        request = self.create_write_command(
            ACTION_REQUEST_REGISTER, [0x0100, 0x0000, 0x0000]
        )
        self._send(request, WRITE_RESPONSE_SIZE, "Failed to activate the gripper.")

        self.update_status()
        while self._gripper_status is GripperStatus.IN_PROGRESS:
            time.sleep(self._poll_interval)
            self.update_status()

    def deactivate(self) -> None:
        _LOGGER.info("Deactivate...")
        request = self.create_write_command(
            ACTION_REQUEST_REGISTER, [0x0000, 0x0000, 0x0000]
        )
        self._send(request, WRITE_RESPONSE_SIZE, "Failed to deactivate the gripper.")

    def set_gripper_position(self, pos: int) -> None:
        _check_byte(pos, "position")
        action_register = 0x09
        gripper_options_1 = 0x00
        gripper_options_2 = 0x00
        request = self.create_write_command(
            ACTION_REQUEST_REGISTER,
            [
                action_register << 8 | gripper_options_1,
                gripper_options_2 << 8 | pos,
                self._commanded_speed << 8 | self._commanded_force,
            ],
        )
        self._send(request, WRITE_RESPONSE_SIZE, "Failed to set gripper position.")

    def get_gripper_position(self) -> int:
        self.update_status()
        return self._gripper_position

    def gripper_is_moving(self) -> bool:
        self.update_status()
        return self._object_detection_status is ObjectDetectionStatus.MOVING

    def set_speed(self, speed: int) -> None:
        self._commanded_speed = _check_byte(speed, "speed")

    def set_force(self, force: int) -> None:
        self._commanded_force = _check_byte(force, "force")

    def _with_crc(self, frame: list[int]) -> bytes:
        crc = compute_crc(frame)
        return bytes([*frame, get_msb(crc), get_lsb(crc)])

    def create_read_command(self, first_register: int, num_registers: int) -> bytes:
        """Build a 'read holding registers' MODBUS RTU frame."""
        _check_byte(num_registers, "register count")
        return self._with_crc(
            [
                self._slave_address,
                READ_FUNCTION_CODE,
                get_msb(first_register),
                get_lsb(first_register),
                get_msb(num_registers),
                get_lsb(num_registers),
            ]
        )

    def create_write_command(self, first_register: int, data: Iterable[int]) -> bytes:
        """Build a 'write multiple registers' MODBUS RTU frame."""
        words = list(data)
        num_registers = len(words)
        num_bytes = _check_byte(2 * num_registers, "byte count")
        frame = [
            self._slave_address,
            WRITE_FUNCTION_CODE,
            get_msb(first_register),
            get_lsb(first_register),
            get_msb(num_registers),
            get_lsb(num_registers),
            num_bytes,
        ]
        for word in words:
            frame.extend((get_msb(word), get_lsb(word)))
        return self._with_crc(frame)

    def update_status(self) -> None:
        """Read the gripper status registers and update the recorded state."""
        request = self.create_read_command(FIRST_OUTPUT_REGISTER, NUM_OUTPUT_REGISTERS)
        response = self._send(
            request, READ_RESPONSE_SIZE, "Failed to read the gripper status."
        )

        status = response[RESPONSE_HEADER_SIZE + GRIPPER_STATUS_INDEX]

        self._activation_status = (
            ActivationStatus.RESET if status & 0x01 == 0 else ActivationStatus.ACTIVE
        )
        self._action_status = (
            ActionStatus.STOPPED if status & 0x08 == 0 else ActionStatus.MOVING
        )
        # The reserved gSTA value 0x02 leaves the previous status untouched.
        self._gripper_status = _GRIPPER_STATUS_BITS.get(
            (status & 0x30) >> 4, self._gripper_status
        )
        self._object_detection_status = _OBJECT_DETECTION_BITS[(status & 0xC0) >> 6]

        self._gripper_position = response[RESPONSE_HEADER_SIZE + POSITION_INDEX]