"""
Data types, device protocols and errors.

1. Profiles (profile.py)
    - `Port`, `Action`, `Operation` and `Profile`, the data a configuration
      is made of.

2. Protocols (protocols.py)
    - Methods a grabber handle must provide for a profile to be applied.

3. Validation (validation.py)
    - Exception hierarchy and structural checks on profiles.

Flow Example:

```python
from grabberconf.types import Operation, Port, Profile

profile = Profile(
    name="exposure_only",
    operations=[
        Operation.execute(Port.REMOTE, "AcquisitionStop"),
        Operation.set(Port.REMOTE, "ExposureTime", 10),
        Operation.execute(Port.REMOTE, "AcquisitionStart"),
    ],
)
```
"""

from .profile import (
    ACQUISITION_START,
    ACQUISITION_STOP,
    Action,
    FeatureValue,
    Operation,
    Port,
    Profile,
)
from .protocols import ControlPortProtocol, GrabberProtocol
from .validation import (
    DeviceOperationError,
    GrabberConfigError,
    GrabberSelectionError,
    ProfileApplicationError,
    ProfileNotFoundError,
    ProfileValidationError,
    ScriptParseError,
    ensure_valid_profile,
    validate_operation,
    validate_profile,
)

__all__ = [
    "ACQUISITION_START",
    "ACQUISITION_STOP",
    "Action",
    "FeatureValue",
    "Operation",
    "Port",
    "Profile",
    "ControlPortProtocol",
    "GrabberProtocol",
    "DeviceOperationError",
    "GrabberConfigError",
    "GrabberSelectionError",
    "ProfileApplicationError",
    "ProfileNotFoundError",
    "ProfileValidationError",
    "ScriptParseError",
    "ensure_valid_profile",
    "validate_operation",
    "validate_profile",
]
