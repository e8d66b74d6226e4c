"""Description of a gripper's hardware configuration and joints."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InterfaceInfo:
    """A single command or state interface of a joint."""

    name: str
    initial_value: str = ""
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class ComponentInfo:
    """A joint and the interfaces it exposes."""

    name: str
    type: str = "joint"
    command_interfaces: list[InterfaceInfo] = field(default_factory=list)
    state_interfaces: list[InterfaceInfo] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class HardwareInfo:
    """Hardware configuration: string parameters and the joints it drives."""

    name: str = ""
    type: str = "system"
    hardware_parameters: dict[str, str] = field(default_factory=dict)
    joints: list[ComponentInfo] = field(default_factory=list)

    def parameter(self, name: str, default: str | None = None) -> str | None:
        """Return the hardware parameter ``name``, or ``default`` if it is unset."""
        return self.hardware_parameters.get(name, default)