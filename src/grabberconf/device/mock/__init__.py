from .mock_grabber import MockControlPort, MockGrabber, PortCall

__all__ = ["MockControlPort", "MockGrabber", "PortCall"]
