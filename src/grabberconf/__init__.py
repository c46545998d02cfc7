# -*- coding: utf-8 -*-
"""# grabberconf

Applies named configuration profiles (trigger lines, strobe output, sensor
geometry, exposure and cycle timing) to a camera on a Euresys frame grabber,
from python or from the `grabberconf` command line.

- [Profiles](grabberconf/profiles/index.html): packaged profiles, the user
  profiles file and eGrabber script import/export.
- [Devices](grabberconf/device/index.html): eGrabber cameras and a mock grabber.
- [Applier](grabberconf/applier.html): ordered, fail-fast profile application.

Example
-------
```python
from grabberconf import apply_profile, load_profile
from grabberconf.device import EGrabberDevice

with EGrabberDevice(camera_index=0) as grabber:
    apply_profile(grabber, load_profile("line_trigger_strobe"))
```
"""

from ._version import __version__
from .applier import ApplyReport, apply_profile, apply_to_grabbers
from .profiles import load_profile

__all__ = [
    "__version__",
    "ApplyReport",
    "apply_profile",
    "apply_to_grabbers",
    "load_profile",
]
