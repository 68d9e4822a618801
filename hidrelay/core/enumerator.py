"""Relay board discovery on top of a HID transport."""

from __future__ import annotations

import logging
from collections.abc import Callable

from hidrelay.core.errors import TransportNotInitializedError
from hidrelay.core.model import DeviceDescriptor
from hidrelay.transports.base import HidTransport

LOGGER = logging.getLogger(__name__)


def describe_device(index: int, device: DeviceDescriptor) -> list[str]:
    """Labeled diagnostic lines for one device, `index` is 1-based."""
    return [
        f"Device {index}",
        f"  type: {device.vendor_id:04x} {device.product_id:04x}",
        f"  path: {device.path}",
        f"  serial_number: {device.serial_number or ''}",
        f"  manufacturer: {device.manufacturer or ''}",
        f"  product:      {device.product or ''}",
    ]


def enumerate_devices(
    transport: HidTransport,
    vendor_id: int,
    product_id: int,
    *,
    verbose: bool = False,
    echo: Callable[[str], None] | None = None,
) -> list[DeviceDescriptor]:
    if not transport.initialized:
        raise TransportNotInitializedError("Cannot enumerate devices before the HID transport is initialized")

    devices = list(transport.enumerate(vendor_id, product_id))
    LOGGER.debug("%d device(s) matched %04x:%04x", len(devices), vendor_id, product_id)

    if verbose:
        emit = echo or LOGGER.info
        emit(f"{len(devices)} device(s) found")
        for index, device in enumerate(devices, start=1):
            for line in describe_device(index, device):
                emit(line)

    return devices
