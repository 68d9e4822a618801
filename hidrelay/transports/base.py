"""Transport interfaces."""

from __future__ import annotations

from typing import Any, Protocol

from hidrelay.core.model import DeviceDescriptor


class HidTransport(Protocol):
    @property
    def initialized(self) -> bool:
        """Whether init() succeeded and shutdown() has not run yet."""

    def init(self) -> None:
        """Start the HID library context."""

    def enumerate(self, vendor_id: int, product_id: int) -> list[DeviceDescriptor]:
        """Return devices matching the vendor/product pair in bus order."""

    def open(self, path: str) -> Any:
        """Open a device by path and return an opaque handle."""

    def write(self, handle: Any, data: bytes) -> int:
        """Write one report and return the number of bytes written."""

    def close(self, handle: Any) -> None:
        """Release a handle returned by open()."""

    def shutdown(self) -> None:
        """Finalize the HID library context."""
