"""Fan-out of relay commands across every discovered board."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from hidrelay.core.model import DeviceDescriptor, OperationResult, RelayCommand, WireState
from hidrelay.core.writer import write_state
from hidrelay.transports.base import HidTransport

# Time the relays stay on during a toggle.
HOLD_SECONDS = 2.0
LOGGER = logging.getLogger(__name__)

_COMMAND_STATES = {
    RelayCommand.ON: WireState.ON,
    RelayCommand.OFF: WireState.OFF,
}


class Hold:
    """Blocking pause between the ON and OFF phases of a toggle.

    The wait cannot be cancelled from inside the process. Tests pass a fake
    `sleep` to observe the duration without waiting.
    """

    def __init__(self, seconds: float = HOLD_SECONDS, sleep: Callable[[float], None] = time.sleep) -> None:
        self.seconds = seconds
        self._sleep = sleep

    def __call__(self) -> None:
        LOGGER.debug("Holding relays for %.1fs", self.seconds)
        self._sleep(self.seconds)


class FanOutController:
    def __init__(self, transport: HidTransport, *, hold: Hold | None = None) -> None:
        self.transport = transport
        self.hold = hold or Hold()

    def apply_to_all(
        self,
        devices: Sequence[DeviceDescriptor],
        command: RelayCommand,
    ) -> list[OperationResult]:
        if not devices:
            return []

        if command is RelayCommand.TOGGLE:
            results = self._fan_out(devices, WireState.ON)
            self.hold()
            results.extend(self._fan_out(devices, WireState.OFF))
            return results

        return self._fan_out(devices, _COMMAND_STATES[command])

    def _fan_out(self, devices: Sequence[DeviceDescriptor], state: WireState) -> list[OperationResult]:
        results = [write_state(self.transport, device, state) for device in devices]
        failed = sum(1 for result in results if not result.ok)
        if failed:
            LOGGER.warning("%d of %d device(s) failed to switch %s", failed, len(results), state.name)
        return results
