"""Protocols a grabber handle has to satisfy to have profiles applied to it.

Devices do not inherit from these; they only need the methods. Both protocols
are `runtime_checkable` so handles can be checked with `isinstance()` before
anything is sent to them.

Example
-------
    class MyGrabber(Device):
        def get_port(self, port: Port) -> ControlPortProtocol:
            ...

    apply_profile(MyGrabber(), LINE_TRIGGER_STROBE)

See Also
--------
grabberconf.device : Device implementations
grabberconf.applier : Profile application
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .profile import Port


@runtime_checkable
class ControlPortProtocol(Protocol):
    """A named sub-interface of a grabber exposing its features."""

    def get(self, feature: str) -> Any:
        """Read a feature value."""
        ...

    def set(self, feature: str, value: Any) -> None:
        """Write a feature value. Raises if the device rejects it."""
        ...

    def execute(self, command: str) -> None:
        """Run a device command. Raises if the device rejects it."""
        ...


@runtime_checkable
class GrabberProtocol(Protocol):
    """A grabber/camera handle with named control ports."""

    def get_port(self, port: Port) -> ControlPortProtocol:
        """Return the control port with the given name."""
        ...
