"""Profile application on a real camera behind a Euresys frame grabber.

Run with `doit test_hardware`. Leaves the camera configured with
line_trigger_strobe.
"""

import pytest

from grabberconf.applier import apply_profile
from grabberconf.profiles import FULL_HD_25FPS, LINE_TRIGGER_STROBE
from grabberconf.types import Port

pytestmark = pytest.mark.hardware


def test_discovery(available_cameras):
    for camera in available_cameras:
        assert set(camera) == {"index", "vendor", "model", "serial"}


@pytest.mark.slow
def test_full_hd(camera):
    report = apply_profile(camera, FULL_HD_25FPS)

    assert report.n_applied == len(FULL_HD_25FPS)
    remote = camera.get_port(Port.REMOTE)
    assert remote.get("Width") == 1920
    assert remote.get("Height") == 1080


def test_line_trigger_strobe(camera):
    report = apply_profile(camera, LINE_TRIGGER_STROBE)

    assert report.n_applied == 21
    remote = camera.get_port(Port.REMOTE)
    assert remote.get("Width") == 512
    assert remote.get("Height") == 96
    assert remote.get("TriggerMode") == "On"


def test_reapply(camera):
    apply_profile(camera, LINE_TRIGGER_STROBE)
    report = apply_profile(camera, LINE_TRIGGER_STROBE)

    assert report.n_applied == 21
