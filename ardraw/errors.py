class ArDrawError(Exception):
    """Base class for errors reported to the host application."""


class CaptureError(ArDrawError):
    """Capture/export could not produce an image."""


class CameraUnavailableError(ArDrawError):
    """The camera device could not be opened."""


class ConfigError(ArDrawError):
    """A configuration file is missing a key or holds an invalid value."""
