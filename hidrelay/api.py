"""Stable public API for building tooling on top of hidrelay.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from hidrelay.core.controller import HOLD_SECONDS, Hold
from hidrelay.core.errors import (
    ConfigError,
    DeviceOpenError,
    DeviceWriteError,
    HidRelayError,
    NoDevicesFoundError,
    SessionStateError,
    TransportError,
    TransportInitError,
    TransportNotInitializedError,
    TransportShutdownError,
)
from hidrelay.core.model import (
    DeviceDescriptor,
    FailureReason,
    OperationResult,
    RelayCommand,
    RelayConfig,
    SessionReport,
    WireState,
)
from hidrelay.core.session import RelaySession
from hidrelay.transports.base import HidTransport
from hidrelay.transports.hidapi import HidapiTransport

__all__ = [
    "HidRelayError",
    "ConfigError",
    "SessionStateError",
    "NoDevicesFoundError",
    "TransportError",
    "TransportInitError",
    "TransportShutdownError",
    "TransportNotInitializedError",
    "DeviceOpenError",
    "DeviceWriteError",
    "DeviceDescriptor",
    "FailureReason",
    "OperationResult",
    "RelayCommand",
    "RelayConfig",
    "SessionReport",
    "WireState",
    "HOLD_SECONDS",
    "Hold",
    "HidTransport",
    "HidapiTransport",
    "RelaySession",
    "Client",
]


class Client:
    """Public client for switching relay boards.

    Every call runs in its own `RelaySession`, so the HID transport is
    initialized and shut down around each operation.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        *,
        transport: HidTransport | None = None,
        hold: Hold | None = None,
    ) -> None:
        self.config = config or RelayConfig()
        self._transport = transport
        self._hold = hold

    def _session(self) -> RelaySession:
        return RelaySession(self.config, transport=self._transport, hold=self._hold)

    def list_devices(self) -> list[DeviceDescriptor]:
        with self._session() as session:
            return session.list_devices()

    def run(self, command: RelayCommand) -> SessionReport:
        with self._session() as session:
            return session.apply(command)

    def set_on(self) -> SessionReport:
        return self.run(RelayCommand.ON)

    def set_off(self) -> SessionReport:
        return self.run(RelayCommand.OFF)

    def toggle(self) -> SessionReport:
        return self.run(RelayCommand.TOGGLE)
