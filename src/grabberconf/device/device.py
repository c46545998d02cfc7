"""Device base class.

All grabber implementations inherit from Device, which provides:

1. Configuration validation
2. Connection handling
3. Attribute access for metadata

A device can have profiles applied to it once it implements
`GrabberProtocol`, i.e. provides `get_port()`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Type

from loguru import logger

if TYPE_CHECKING:
    from grabberconf.types import ControlPortProtocol, Port


class Device:
    """Base class for grabber devices.

    Required Methods
    --------------
    All device implementations must override these methods:

    - open(): Connect to the hardware
    - close(): Disconnect from the hardware
    - is_connected(): Check connection status
    - get_port(): Return a named control port

    Attributes
    ----------
    required_config : dict[str, Type]
        Required configuration parameters and their types

    Examples
    --------
    ```python
    class MyGrabber(Device):
        required_config = {"camera_index": int}

        def open(self) -> tuple[bool, str]:
            self._connected = True
            return True, "Connected successfully"

        def close(self):
            self._connected = False

        def is_connected(self) -> bool:
            return self._connected

        def get_port(self, port):
            ...

    grabber = MyGrabber(camera_index=0)
    ```

    See Also
    --------
    grabberconf.types.protocols : Protocol definitions
    """

    required_config: dict[str, Type] = {}  # Required configuration keys

    def __init__(self, **config_kwargs):
        for key, value in config_kwargs.items():
            setattr(self, key, value)
        for key, value in self.required_config.items():
            if not hasattr(self, key):
                logger.error(
                    f"Device {self.__class__.__name__} missing required config key: "
                    + f"{key}"
                )
                raise ValueError(
                    f"Device {self.__class__.__name__} missing required config "
                    + f"key: {key}"
                )
            if not isinstance(getattr(self, key), value):
                logger.error(
                    f"Device {self.__class__.__name__} config key {key} "
                    + f"has wrong type: {type(getattr(self, key))} (expected {value})"
                )
                raise ValueError(
                    f"Device {self.__class__.__name__} config key {key} has "
                    + f"wrong type: {type(getattr(self, key))} (expected {value})"
                )

    def open(self) -> tuple[bool, str]:
        raise NotImplementedError()

    def close(self):
        raise NotImplementedError()

    def is_connected(self) -> bool:
        raise NotImplementedError()

    def get_port(self, port: Port) -> ControlPortProtocol:
        raise NotImplementedError()

    def __enter__(self):
        ok, msg = self.open()
        if not ok:
            raise ConnectionError(msg)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get_all_attrs(self):
        """
        Function to return all of the managed attributes of the class
        Managed attributes are the ones that start with a underscore
        """
        attrs = {}
        for key, value in self.__dict__.items():
            # single underscore attr are managed
            if key[0] == "_" and not key.startswith(f"_{self.__class__.__name__}"):
                attrs[key[1:]] = value
        return attrs

    def unroll_metadata(self):
        return self.get_all_attrs()
