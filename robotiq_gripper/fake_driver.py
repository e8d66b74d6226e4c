"""A stand-in driver that records commands instead of talking to hardware."""

from __future__ import annotations

import logging

from robotiq_gripper.driver import Driver

_LOGGER = logging.getLogger(__name__)


def _check_byte(value: int, what: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be between 0 and 255, got {value}")
    return value


class FakeDriver(Driver):
    """A driver for testing without a gripper attached.

    It remembers every setting it is given and reports the last commanded
    position back as the current one. It is selected by setting the
    ``use_dummy`` hardware parameter to anything other than ``"false"``.
    """

    def __init__(self) -> None:
        self._slave_address = 0x00
        self._connected = False
        self._activated = False
        self._position = 0
        self._moving = False
        self._speed = 0
        self._force = 0

    @property
    def slave_address(self) -> int:
        return self._slave_address

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def activated(self) -> bool:
        return self._activated

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def force(self) -> int:
        return self._force

    def set_slave_address(self, slave_address: int) -> None:
        self._slave_address = _check_byte(slave_address, "slave address")
        _LOGGER.info("slave_address set to: %d", slave_address)

    def connect(self) -> bool:
        self._connected = True
        _LOGGER.info("Gripper connected.")
        return True

    def disconnect(self) -> None:
        _LOGGER.info("Gripper disconnected.")
        self._connected = False

    def activate(self) -> None:
        _LOGGER.info("Gripper activated.")
        self._activated = True

    def deactivate(self) -> None:
        _LOGGER.info("Gripper deactivated.")
        self._activated = False

    def set_gripper_position(self, pos: int) -> None:
        self._position = _check_byte(pos, "position")

    def get_gripper_position(self) -> int:
        return self._position

    def gripper_is_moving(self) -> bool:
        return self._moving

    def set_speed(self, speed: int) -> None:
        _LOGGER.info("Set gripper speed.")
        self._speed = _check_byte(speed, "speed")

    def set_force(self, force: int) -> None:
        _LOGGER.info("Set gripper force.")
        self._force = _check_byte(force, "force")