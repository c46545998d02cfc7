"""Euresys eGrabber frame grabbers.

Uses the `egrabber` python binding shipped with the eGrabber SDK (it is not
distributed on PyPI). The binding is imported when a device is opened, so the
rest of the package works without it.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from grabberconf.device.device import Device
from grabberconf.types import DeviceOperationError, GrabberConfigError, Port
from grabberconf.util.logging import format_error_response

# Port -> attribute of the egrabber.EGrabber object
PORT_MODULES = {
    Port.REMOTE: "remote",
    Port.INTERFACE: "interface",
    Port.DEVICE: "device",
}


class EGrabberImportError(GrabberConfigError, ImportError):
    pass


def get_egrabber():
    """Import the vendor binding."""
    try:
        import egrabber

        return egrabber
    except ImportError as e:
        raise EGrabberImportError(
            f"Failed to import the eGrabber python binding: {str(e)}. "
            + "Install the wheel shipped with the eGrabber SDK."
        ) from e


def list_cameras() -> list[dict[str, Any]]:
    """Discover connected cameras.

    Returns
    -------
    list[dict[str, Any]]
        One entry per camera with its index, vendor, model and serial number.
    """
    eg = get_egrabber()
    gentl = eg.EGenTL()
    discovery = eg.EGrabberDiscovery(gentl)
    discovery.discover()

    cameras = []
    for index in range(discovery.camera_count()):
        grabber = eg.EGrabber(discovery.cameras(index))
        info = {"index": index}
        for key, feature in (
            ("vendor", "DeviceVendorName"),
            ("model", "DeviceModelName"),
            ("serial", "DeviceSerialNumber"),
        ):
            try:
                info[key] = grabber.remote.get(feature)
            except Exception:
                logger.debug(f"Camera {index} has no {feature}")
                info[key] = ""
        cameras.append(info)
    return cameras


class EGrabberPort:
    """Control port of an eGrabber, re-raising vendor errors as DeviceOperationError."""

    def __init__(self, module, port: Port):
        self._module = module
        self.port = port

    def get(self, feature: str) -> Any:
        try:
            return self._module.get(feature)
        except Exception as e:
            raise DeviceOperationError(f"{self.port}: get {feature} failed: {e}") from e

    def set(self, feature: str, value: Any) -> None:
        try:
            self._module.set(feature, value)
        except Exception as e:
            raise DeviceOperationError(
                f"{self.port}: set {feature}={value!r} failed: {e}"
            ) from e

    def execute(self, command: str) -> None:
        try:
            self._module.execute(command)
        except Exception as e:
            raise DeviceOperationError(
                f"{self.port}: execute {command} failed: {e}"
            ) from e


class EGrabberDevice(Device):
    """Camera on a Euresys frame grabber.

    Parameters
    ----------
    camera_index : int
        Index of the camera among those discovered. Falls back to the first
        camera if out of range.
    """

    required_config = {"camera_index": int}

    def __init__(self, camera_index: int = 0, **config_kwargs):
        super().__init__(camera_index=camera_index, **config_kwargs)
        self._camera_index = camera_index
        self._grabber = None
        self._gentl = None
        self._name = ""

    def open(self) -> tuple[bool, str]:
        try:
            eg = get_egrabber()
            self._gentl = eg.EGenTL()
            discovery = eg.EGrabberDiscovery(self._gentl)
            discovery.discover()

            n_cameras = discovery.camera_count()
            if n_cameras == 0:
                raise RuntimeError("No cameras detected")
            if not 0 <= self.camera_index < n_cameras:
                logger.warning(
                    "Camera index {} out of range ({} camera(s)), using camera 0",
                    self.camera_index,
                    n_cameras,
                )
                self.camera_index = 0
            self._camera_index = self.camera_index

            self._grabber = eg.EGrabber(discovery.cameras(self.camera_index))
            self._name = self._grabber.remote.get("DeviceModelName")
            logger.info(f"Connected to camera {self.camera_index}: {self._name}")
            return True, f"Connected to camera {self.camera_index}: {self._name}"
        except Exception:
            logger.exception("Error connecting to camera.")
            self._grabber = None
            return False, f"Error connecting to camera: {format_error_response()}"

    def close(self):
        if self._grabber is not None:
            # the binding releases the GenTL handles on collection
            self._grabber = None
            self._gentl = None
            logger.info("Disconnected from camera: {}", self._name or "Unknown camera")

    def is_connected(self) -> bool:
        return self._grabber is not None

    def get_port(self, port: Port) -> EGrabberPort:
        if self._grabber is None:
            raise DeviceOperationError("Camera is not open")
        port = Port(port)
        return EGrabberPort(getattr(self._grabber, PORT_MODULES[port]), port)

    def run_script(self, path: str) -> None:
        """Run an eGrabber script file with the vendor script engine."""
        if self._grabber is None:
            raise DeviceOperationError("Camera is not open")
        try:
            self._grabber.run_script(str(path))
        except Exception as e:
            raise DeviceOperationError(f"Script {path} failed: {e}") from e
        logger.info(f"Config script {path} executed on camera {self.camera_index}")
