"""Domain-specific errors for hidrelay."""


class HidRelayError(Exception):
    """Base error for hidrelay."""


class ConfigError(HidRelayError):
    """Raised when the relay configuration is out of range."""


class SessionStateError(HidRelayError):
    """Raised when a session operation is attempted in the wrong state."""


class NoDevicesFoundError(HidRelayError):
    """Raised when no relay board matches the vendor/product pair."""


class TransportError(HidRelayError):
    """Base transport error."""


class TransportInitError(TransportError):
    """Raised when the HID library cannot be initialized."""


class TransportShutdownError(TransportError):
    """Raised when the HID library cannot be finalized."""


class TransportNotInitializedError(TransportError):
    """Raised when the transport is used before init()."""


class DeviceOpenError(TransportError):
    """Raised when a device path cannot be opened."""


class DeviceWriteError(TransportError):
    """Raised when writing a report to an open device fails."""
