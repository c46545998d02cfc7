"""Profile and operation types.

A profile is an ordered list of operations against the named control ports of
a frame grabber. Order matters: later operations depend on register state left
by earlier ones (e.g. geometry writes need acquisition to be stopped).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mashumaro import DataClassDictMixin

# python types a feature value may take, in the order they are tried
FeatureValue = bool | int | float | str


class Port(str, Enum):
    """Control ports of a grabber, named as the vendor API names them."""

    REMOTE = "RemotePort"
    INTERFACE = "InterfacePort"
    DEVICE = "DevicePort"

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    SET = "set"
    EXECUTE = "execute"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Operation(DataClassDictMixin):
    """One call against a control port.

    Attributes
    ----------
    port : Port
        Port the call is made on.
    action : Action
        `set` writes `value` to feature `key`; `execute` runs command `key`.
    key : str
        Feature or command name (bit-exact device name).
    value : Any
        Value for `set` (str, int, bool or float, type preserved), None for
        `execute`.
    """

    port: Port
    action: Action
    key: str
    value: Any = None

    @classmethod
    def set(cls, port: Port, key: str, value: FeatureValue) -> Operation:
        return cls(port=port, action=Action.SET, key=key, value=value)

    @classmethod
    def execute(cls, port: Port, command: str) -> Operation:
        return cls(port=port, action=Action.EXECUTE, key=command)

    def is_command(self, port: Port, command: str) -> bool:
        return (
            self.action is Action.EXECUTE and self.port is port and self.key == command
        )

    def __str__(self) -> str:
        if self.action is Action.EXECUTE:
            return f"{self.port}.execute({self.key!r})"
        return f"{self.port}.set({self.key!r}, {self.value!r})"


@dataclass(frozen=True)
class Profile(DataClassDictMixin):
    """Named, ordered sequence of operations making up one device configuration."""

    name: str
    operations: tuple[Operation, ...]
    description: str = ""

    def __post_init__(self):
        # allow lists on construction, keep the stored sequence immutable
        object.__setattr__(self, "operations", tuple(self.operations))

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self):
        return iter(self.operations)

    def set_operations(self) -> list[Operation]:
        return [op for op in self.operations if op.action is Action.SET]

    def final_values(self) -> dict[tuple[Port, str], Any]:
        """Last value written to each (port, feature), ignoring selectors."""
        values = {}
        for op in self.set_operations():
            values[(op.port, op.key)] = op.value
        return values

    def renamed(self, name: str, description: str | None = None) -> Profile:
        return Profile(
            name=name,
            operations=self.operations,
            description=self.description if description is None else description,
        )


ACQUISITION_STOP = "AcquisitionStop"
ACQUISITION_START = "AcquisitionStart"
