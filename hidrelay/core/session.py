"""Session lifecycle used by CLI and API frontends."""

from __future__ import annotations

import logging
from collections.abc import Callable

from hidrelay.core.controller import FanOutController, Hold
from hidrelay.core.enumerator import enumerate_devices
from hidrelay.core.errors import NoDevicesFoundError, SessionStateError, TransportShutdownError
from hidrelay.core.model import DeviceDescriptor, RelayCommand, RelayConfig, SessionReport, SessionState
from hidrelay.transports.base import HidTransport
from hidrelay.transports.hidapi import HidapiTransport

LOGGER = logging.getLogger(__name__)


class RelaySession:
    """Owns the transport context for one run.

    States move `UNINITIALIZED -> READY -> CLOSED` and never back; a new run
    needs a new session. `close()` shuts the transport down at most once and
    records a shutdown failure on `shutdown_error` instead of raising it.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        *,
        transport: HidTransport | None = None,
        hold: Hold | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config or RelayConfig()
        self.transport = transport or HidapiTransport()
        self.controller = FanOutController(self.transport, hold=hold)
        self.echo = echo
        self.shutdown_error: TransportShutdownError | None = None
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    def open(self) -> None:
        if self._state is not SessionState.UNINITIALIZED:
            raise SessionStateError(f"Cannot open a session in state '{self._state.value}'")
        self.transport.init()
        self._state = SessionState.READY

    def close(self) -> None:
        if self._state is SessionState.CLOSED:
            return
        was_ready = self._state is SessionState.READY
        self._state = SessionState.CLOSED
        if not was_ready:
            return
        try:
            self.transport.shutdown()
        except TransportShutdownError as exc:
            LOGGER.error("HID transport shutdown failed: %s", exc)
            self.shutdown_error = exc

    def list_devices(self) -> list[DeviceDescriptor]:
        self._require_ready()
        return enumerate_devices(
            self.transport,
            self.config.vendor_id,
            self.config.product_id,
            verbose=self.config.verbose,
            echo=self.echo,
        )

    def apply(self, command: RelayCommand) -> SessionReport:
        devices = self.list_devices()
        if not devices:
            raise NoDevicesFoundError(
                f"No relay board has been found ({self.config.vendor_id:04x}:{self.config.product_id:04x})."
            )

        results = self.controller.apply_to_all(devices, command)
        return SessionReport(command=command, devices=tuple(devices), results=tuple(results))

    def __enter__(self) -> RelaySession:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_ready(self) -> None:
        if self._state is not SessionState.READY:
            raise SessionStateError(f"Session is '{self._state.value}', expected 'ready'")
