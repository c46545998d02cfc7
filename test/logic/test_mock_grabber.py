import pytest

from grabberconf.device import Device, MockGrabber, PortCall
from grabberconf.types import (
    Action,
    ControlPortProtocol,
    DeviceOperationError,
    GrabberProtocol,
    Port,
)


def test_protocols(grabber):
    assert isinstance(grabber, GrabberProtocol)
    for port in Port:
        assert isinstance(grabber.get_port(port), ControlPortProtocol)
    assert grabber.get_port("RemotePort") is grabber.get_port(Port.REMOTE)


def test_open_close():
    grabber = MockGrabber()
    assert not grabber.is_connected()
    with grabber:
        assert grabber.is_connected()
    assert not grabber.is_connected()


def test_closed_grabber_refuses_calls():
    grabber = MockGrabber()
    with pytest.raises(DeviceOperationError, match="not open"):
        grabber.get_port(Port.REMOTE).set("ExposureTime", 3)


def test_geometry_locked_while_acquiring(grabber):
    remote = grabber.get_port(Port.REMOTE)
    with pytest.raises(DeviceOperationError, match="while acquisition is running"):
        remote.set("Width", 512)

    remote.execute("AcquisitionStop")
    remote.set("Width", 512)
    assert remote.get("Width") == 512


def test_non_geometry_writable_while_acquiring(grabber):
    grabber.get_port(Port.REMOTE).set("ExposureTime", 3)
    assert grabber.get_port(Port.REMOTE).get("ExposureTime") == 3


def test_acquisition_state(grabber):
    remote = grabber.get_port(Port.REMOTE)
    assert grabber.is_acquiring()
    remote.execute("AcquisitionStop")
    assert not grabber.is_acquiring()
    remote.execute("AcquisitionStart")
    assert grabber.is_acquiring()

    # only the remote port drives acquisition
    grabber.get_port(Port.DEVICE).execute("AcquisitionStop")
    assert grabber.is_acquiring()


def test_calls_shared_across_ports(grabber):
    grabber.get_port(Port.INTERFACE).set("LineSelector", "TTLIO12")
    grabber.get_port(Port.DEVICE).set("StrobeDelay", "-4")
    grabber.get_port(Port.REMOTE).execute("AcquisitionStop")

    assert grabber.calls == [
        PortCall(Port.INTERFACE, Action.SET, "LineSelector", "TTLIO12"),
        PortCall(Port.DEVICE, Action.SET, "StrobeDelay", "-4"),
        PortCall(Port.REMOTE, Action.EXECUTE, "AcquisitionStop"),
    ]
    grabber.clear_calls()
    assert grabber.calls == []


def test_selected_registers(grabber):
    interface = grabber.get_port(Port.INTERFACE)
    interface.set("LineSelector", "TTLIO12")
    interface.set("LineSource", "Low")
    interface.set("LineSelector", "TTLIO11")
    interface.set("LineSource", "Device0Strobe")

    assert interface.get("LineSource") == "Device0Strobe"
    interface.set("LineSelector", "TTLIO12")
    assert interface.get("LineSource") == "Low"


def test_ports_have_separate_registers(grabber):
    grabber.get_port(Port.DEVICE).set("ExposureTime", 1)
    with pytest.raises(DeviceOperationError, match="has no value"):
        grabber.get_port(Port.REMOTE).get("ExposureTime")


def test_reject(grabber):
    grabber.reject("StrobeDuration", "unsupported feature")
    with pytest.raises(DeviceOperationError, match="unsupported feature"):
        grabber.get_port(Port.DEVICE).set("StrobeDuration", "12")
    # the attempt is still logged
    assert grabber.calls[-1].key == "StrobeDuration"
    assert (Port.DEVICE, "StrobeDuration") not in grabber.registers


def test_reject_on_construction():
    grabber = MockGrabber(acquiring=False, reject={"Width": "too wide"})
    grabber.open()
    with pytest.raises(DeviceOperationError, match="too wide"):
        grabber.get_port(Port.REMOTE).set("Width", 99999)


def test_device_required_config():
    class IndexedGrabber(Device):
        required_config = {"camera_index": int}

    with pytest.raises(ValueError, match="missing required config key"):
        IndexedGrabber()
    with pytest.raises(ValueError, match="wrong type"):
        IndexedGrabber(camera_index="0")
    assert IndexedGrabber(camera_index=1).camera_index == 1


def test_metadata(grabber):
    attrs = grabber.get_all_attrs()
    assert attrs["connected"] is True
    assert attrs["acquiring"] is True
