import pytest

from grabberconf.device import MockGrabber


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow running test")
    config.addinivalue_line(
        "markers", "hardware: marks test that require physical hardware"
    )


@pytest.fixture
def tmp_home(tmp_path, monkeypatch):
    """Point the user's home (and so ~/.grabberconf) at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


@pytest.fixture
def grabber():
    """Open mock grabber, acquisition running."""
    grabber = MockGrabber()
    grabber.open()
    yield grabber
    grabber.close()
