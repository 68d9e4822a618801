"""Single-device relay writes."""

from __future__ import annotations

import logging

from hidrelay.core.errors import DeviceOpenError, DeviceWriteError
from hidrelay.core.model import DeviceDescriptor, FailureReason, OperationResult, WireState
from hidrelay.transports.base import HidTransport

REPORT_LENGTH = 3
LOGGER = logging.getLogger(__name__)


def build_report(state: WireState) -> bytes:
    """Fixed-size output report: state byte followed by zero padding."""
    if not isinstance(state, WireState):
        raise ValueError(f"Invalid relay wire state: {state!r}")
    return bytes([state.value]) + bytes(REPORT_LENGTH - 1)


def write_state(transport: HidTransport, device: DeviceDescriptor, state: WireState) -> OperationResult:
    report = build_report(state)

    try:
        handle = transport.open(device.path)
    except DeviceOpenError as exc:
        LOGGER.error("Open failed: %s", exc)
        return OperationResult(device=device, state=state, failure=FailureReason.OPEN_FAILED, detail=str(exc))

    try:
        written = transport.write(handle, report)
    except DeviceWriteError as exc:
        LOGGER.error("Write to %s failed: %s", device.path, exc)
        return OperationResult(device=device, state=state, failure=FailureReason.WRITE_FAILED, detail=str(exc))
    finally:
        transport.close(handle)

    if written < 0:
        detail = f"hid_write returned {written}"
        LOGGER.error("Write to %s failed: %s", device.path, detail)
        return OperationResult(device=device, state=state, failure=FailureReason.WRITE_FAILED, detail=detail)

    LOGGER.debug("Wrote state %s to %s", state.name, device.path)
    return OperationResult(device=device, state=state)
