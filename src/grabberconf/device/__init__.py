# -*- coding: utf-8 -*-
"""
Grabber device implementations.

- EGrabberDevice: cameras on Euresys frame grabbers (eGrabber SDK)
- MockGrabber: in-memory grabber recording every call, for tests and dry runs

Each device class implements the interface defined by the Device base class
and provides named control ports through `get_port()`.

Examples
--------
Applying a profile to the first camera found:
```python
from grabberconf.applier import apply_profile
from grabberconf.device import EGrabberDevice
from grabberconf.profiles import LINE_TRIGGER_STROBE

with EGrabberDevice(camera_index=0) as grabber:
    apply_profile(grabber, LINE_TRIGGER_STROBE)
```

See Also
--------
grabberconf.types.protocols : Protocol definitions
"""

from .device import Device
from .egrabber import EGrabberDevice, EGrabberImportError, get_egrabber, list_cameras
from .mock import MockControlPort, MockGrabber, PortCall

__all__ = [
    "Device",
    "EGrabberDevice",
    "EGrabberImportError",
    "get_egrabber",
    "list_cameras",
    "MockControlPort",
    "MockGrabber",
    "PortCall",
]
