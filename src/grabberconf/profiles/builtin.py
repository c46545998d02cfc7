"""Profiles shipped with the package.

Rules for writing a profile that the camera accepts:

- Decrease the resolution before increasing the frame rate.
- Remove the offset before increasing the resolution.
"""

from __future__ import annotations

from grabberconf.types import (
    ACQUISITION_START,
    ACQUISITION_STOP,
    Operation,
    Port,
    Profile,
)

_set = Operation.set
_execute = Operation.execute

LINE_TRIGGER_STROBE = Profile(
    name="line_trigger_strobe",
    description="512x96 window, external trigger on LinkTrigger0, LED strobe on TTLIO11",
    operations=(
        _execute(Port.REMOTE, ACQUISITION_STOP),
        # trigger line
        _set(Port.INTERFACE, "LineSelector", "TTLIO12"),
        _set(Port.INTERFACE, "LineMode", "Output"),
        _set(Port.INTERFACE, "LineSource", "Low"),
        # LED line
        _set(Port.INTERFACE, "LineSelector", "TTLIO11"),
        _set(Port.INTERFACE, "LineMode", "Output"),
        _set(Port.INTERFACE, "LineInverter", True),
        _set(Port.INTERFACE, "LineSource", "Device0Strobe"),
        # geometry, resolution goes down before the offsets move out
        _set(Port.REMOTE, "Width", 512),
        _set(Port.REMOTE, "Height", 96),
        _set(Port.REMOTE, "OffsetY", 500),
        _set(Port.REMOTE, "OffsetX", 704),
        _set(Port.REMOTE, "ExposureTime", 3),
        # timing is written as strings on the device port
        _set(Port.DEVICE, "CameraControlMethod", "RC"),
        _set(Port.DEVICE, "ExposureRecoveryTime", "200"),
        _set(Port.DEVICE, "CycleMinimumPeriod", "200"),
        _set(Port.DEVICE, "StrobeDelay", "-4"),
        _set(Port.DEVICE, "StrobeDuration", "12"),
        _set(Port.REMOTE, "TriggerMode", "On"),
        _set(Port.REMOTE, "TriggerSource", "LinkTrigger0"),
        _execute(Port.REMOTE, ACQUISITION_START),
    ),
)

FULL_HD_25FPS = Profile(
    name="full_hd_25fps",
    description="1920x1080 full frame at 25 fps, trigger line held low",
    operations=(
        _execute(Port.REMOTE, ACQUISITION_STOP),
        _set(Port.INTERFACE, "LineSelector", "TTLIO12"),
        _set(Port.INTERFACE, "LineMode", "Output"),
        _set(Port.INTERFACE, "LineSource", "Low"),
        # frame rate goes down before upscaling
        _set(Port.REMOTE, "AcquisitionFrameRate", 25),
        _set(Port.REMOTE, "ExposureTime", 20),
        _set(Port.REMOTE, "OffsetY", 0),
        _set(Port.REMOTE, "OffsetX", 0),
        _set(Port.REMOTE, "Width", 1920),
        _set(Port.REMOTE, "Height", 1080),
        _execute(Port.REMOTE, ACQUISITION_START),
    ),
)

BUILTIN_PROFILES: dict[str, Profile] = {
    p.name: p for p in (LINE_TRIGGER_STROBE, FULL_HD_25FPS)
}


def get_builtin_profile(name: str) -> Profile | None:
    """Case-insensitive lookup of a shipped profile, None if there is none."""
    for key, profile in BUILTIN_PROFILES.items():
        if key.lower() == name.lower():
            return profile
    return None
