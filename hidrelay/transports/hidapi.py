"""HID transport implementation using the cython `hidapi` bindings."""

from __future__ import annotations

import logging
from typing import Any

from hidrelay.core.errors import (
    DeviceOpenError,
    DeviceWriteError,
    TransportError,
    TransportInitError,
    TransportNotInitializedError,
    TransportShutdownError,
)
from hidrelay.core.model import DeviceDescriptor

LOGGER = logging.getLogger(__name__)
_PATH_ENCODING = "utf-8"


def _decode_path(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode(_PATH_ENCODING, errors="surrogateescape")
    return raw


def _encode_path(path: str) -> bytes:
    return path.encode(_PATH_ENCODING, errors="surrogateescape")


def _entry_to_descriptor(entry: dict[str, Any]) -> DeviceDescriptor:
    """Convert one `hid.enumerate()` dictionary to a DeviceDescriptor."""
    return DeviceDescriptor(
        vendor_id=entry["vendor_id"],
        product_id=entry["product_id"],
        path=_decode_path(entry["path"]),
        serial_number=entry.get("serial_number") or None,
        manufacturer=entry.get("manufacturer_string") or None,
        product=entry.get("product_string") or None,
    )


class HidapiTransport:
    def __init__(self) -> None:
        self._hid: Any = None

    @property
    def initialized(self) -> bool:
        return self._hid is not None

    def init(self) -> None:
        try:
            import hid  # type: ignore
        except ImportError as exc:
            raise TransportInitError(
                "HID transport requires 'hidapi' and the native hidapi library. Install dependency and retry."
            ) from exc
        if not hasattr(hid, "device"):
            raise TransportInitError(
                "Imported 'hid' module is not the hidapi binding (missing hid.device)."
            )
        self._hid = hid
        LOGGER.debug("hidapi transport initialized")

    def enumerate(self, vendor_id: int, product_id: int) -> list[DeviceDescriptor]:
        hid = self._require_hid()
        try:
            entries = hid.enumerate(vendor_id, product_id)
        except OSError as exc:
            raise TransportError(f"HID enumeration failed: {exc}") from exc
        return [_entry_to_descriptor(entry) for entry in entries]

    def open(self, path: str) -> Any:
        hid = self._require_hid()
        handle = hid.device()
        try:
            handle.open_path(_encode_path(path))
        except (OSError, ValueError) as exc:
            raise DeviceOpenError(f"unable to open device {path}: {exc}") from exc
        return handle

    def write(self, handle: Any, data: bytes) -> int:
        try:
            return handle.write(data)
        except (OSError, ValueError) as exc:
            raise DeviceWriteError(f"hid_write failed: {exc}") from exc

    def close(self, handle: Any) -> None:
        handle.close()

    def shutdown(self) -> None:
        if self._hid is None:
            raise TransportShutdownError("HID transport was not initialized")
        # The binding owns hid_init/hid_exit; dropping the module ends this context.
        self._hid = None
        LOGGER.debug("hidapi transport shut down")

    def _require_hid(self) -> Any:
        if self._hid is None:
            raise TransportNotInitializedError("HID transport used before init()")
        return self._hid
