"""Modbus RTU serial driver, fake driver and helpers for Robotiq grippers."""

__version__ = "0.1.0"