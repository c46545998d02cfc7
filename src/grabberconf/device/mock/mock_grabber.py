from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from grabberconf.device.device import Device
from grabberconf.types import (
    ACQUISITION_START,
    ACQUISITION_STOP,
    Action,
    DeviceOperationError,
    Port,
)

# selector feature -> features whose register depends on the selected value
SELECTORS = {
    "LineSelector": ("LineMode", "LineSource", "LineInverter", "LineFormat"),
    "TriggerSelector": ("TriggerMode", "TriggerSource", "TriggerActivation"),
}
# can only be written while acquisition is stopped
LOCKED_WHILE_ACQUIRING = {"Width", "Height", "OffsetX", "OffsetY", "PixelFormat"}


@dataclass(frozen=True)
class PortCall:
    """One call received by a mock port, in the order it was received."""

    port: Port
    action: Action
    key: str
    value: Any = None


class MockControlPort:
    def __init__(self, grabber: MockGrabber, port: Port):
        self._grabber = grabber
        self.port = port

    def get(self, feature: str) -> Any:
        return self._grabber._read(self.port, feature)

    def set(self, feature: str, value: Any) -> None:
        self._grabber._write(self.port, feature, value)

    def execute(self, command: str) -> None:
        self._grabber._execute(self.port, command)

    def __repr__(self):
        return f"MockControlPort({self.port})"


class MockGrabber(Device):  # Protocol compliance checked by isinstance
    """Grabber stand-in keeping register state and a log of every call.

    All ports share one call log, so the order of calls across ports can be
    checked. Writes to a feature that depends on a selector (e.g. `LineMode`
    under `LineSelector`) are stored per selected value, the way the device
    keeps one register per line.

    Parameters
    ----------
    acquiring : bool
        Whether acquisition is running when the mock is created.
    reject : dict[str, str]
        Feature or command names the device refuses, mapped to the reason.
    """

    def __init__(self, acquiring: bool = True, reject=None, **config_kwargs):
        super().__init__(**config_kwargs)
        self._connected = False
        self._acquiring = acquiring
        self._rejected: dict[str, str] = dict(reject or {})
        self._registers: dict[tuple[Port, str], Any] = {}
        self._calls: list[PortCall] = []
        self._ports = {port: MockControlPort(self, port) for port in Port}

    def open(self) -> tuple[bool, str]:
        self._connected = True
        logger.info("Connected to grabber: MockGrabber")
        return True, "Connected to grabber: MockGrabber"

    def close(self):
        self._connected = False
        logger.info("Disconnected from grabber: {}", "MockGrabber")

    def is_connected(self) -> bool:
        return self._connected

    def get_port(self, port: Port) -> MockControlPort:
        return self._ports[Port(port)]

    # inspection, for tests and dry runs

    @property
    def calls(self) -> list[PortCall]:
        return list(self._calls)

    @property
    def registers(self) -> dict[tuple[Port, str], Any]:
        return dict(self._registers)

    def clear_calls(self):
        self._calls.clear()

    def is_acquiring(self) -> bool:
        return self._acquiring

    def reject(self, name: str, reason: str = "value out of range"):
        self._rejected[name] = reason

    # port handlers

    def _check(self, port: Port, name: str):
        if not self._connected:
            raise DeviceOperationError("MockGrabber is not open")
        if name in self._rejected:
            raise DeviceOperationError(f"{port}: {name} rejected: {self._rejected[name]}")

    def _register_key(self, port: Port, feature: str) -> tuple[Port, str]:
        for selector, dependents in SELECTORS.items():
            if feature in dependents:
                selected = self._registers.get((port, selector))
                if selected is not None:
                    return port, f"{feature}[{selected}]"
        return port, feature

    def _read(self, port: Port, feature: str) -> Any:
        self._check(port, feature)
        key = self._register_key(port, feature)
        if key not in self._registers:
            raise DeviceOperationError(f"{port}: feature {feature} has no value")
        return self._registers[key]

    def _write(self, port: Port, feature: str, value: Any):
        self._calls.append(PortCall(port, Action.SET, feature, value))
        self._check(port, feature)
        if self._acquiring and feature in LOCKED_WHILE_ACQUIRING:
            raise DeviceOperationError(
                f"{port}: {feature} can't be written while acquisition is running"
            )
        self._registers[self._register_key(port, feature)] = value

    def _execute(self, port: Port, command: str):
        self._calls.append(PortCall(port, Action.EXECUTE, command))
        self._check(port, command)
        if port is Port.REMOTE and command == ACQUISITION_STOP:
            self._acquiring = False
        elif port is Port.REMOTE and command == ACQUISITION_START:
            self._acquiring = True
