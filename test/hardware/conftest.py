import pytest

from grabberconf.device import EGrabberDevice, list_cameras
from grabberconf.types import GrabberConfigError
from grabberconf.util import TEST_LOGLEVEL, get_log_filename, shutdown_log, start_log


@pytest.fixture(scope="session", autouse=True)
def hardware_log(tmp_path_factory):
    """Log every device call of the session to a file, kept for inspection."""
    start_log(
        log_path=str(tmp_path_factory.mktemp("logs") / "hardware.log"),
        log_level=TEST_LOGLEVEL,
    )
    yield get_log_filename()
    shutdown_log()


@pytest.fixture(scope="session")
def available_cameras():
    """Cameras reported by the eGrabber discovery, skips if there are none."""
    try:
        cameras = list_cameras()
    except GrabberConfigError as e:
        pytest.skip(f"eGrabber not available: {e}")
    if not cameras:
        pytest.skip("No cameras detected")
    return cameras


@pytest.fixture
def camera(available_cameras):
    """First camera, opened for the duration of the test."""
    device = EGrabberDevice(camera_index=available_cameras[0]["index"])
    ok, msg = device.open()
    if not ok:
        pytest.skip(msg)
    yield device
    device.close()
