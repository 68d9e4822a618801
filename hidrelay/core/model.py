"""Core data models used across enumerator, controller, session, and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from hidrelay.core.errors import ConfigError

DEFAULT_VENDOR_ID = 0x0519
DEFAULT_PRODUCT_ID = 0x2018
_MAX_USB_ID = 0xFFFF


class RelayCommand(enum.Enum):
    ON = "on"
    OFF = "off"
    TOGGLE = "toggle"


class WireState(enum.IntEnum):
    """Byte values understood by the relay board firmware."""

    OFF = 1
    ON = 0xF1


class FailureReason(enum.Enum):
    OPEN_FAILED = "open failed"
    WRITE_FAILED = "write failed"


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class DeviceDescriptor:
    vendor_id: int
    product_id: int
    path: str
    serial_number: str | None = None
    manufacturer: str | None = None
    product: str | None = None

    @property
    def type_id(self) -> str:
        return f"{self.vendor_id:04x}:{self.product_id:04x}"


@dataclass(frozen=True)
class OperationResult:
    device: DeviceDescriptor
    state: WireState
    failure: FailureReason | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class RelayConfig:
    """Settings for one relay session, built once from parsed arguments.

    `device_id` is accepted for command-line compatibility but has no effect
    on which boards are targeted.
    """

    vendor_id: int = DEFAULT_VENDOR_ID
    product_id: int = DEFAULT_PRODUCT_ID
    verbose: bool = False
    device_id: str | None = None

    def __post_init__(self) -> None:
        for label, value in (("vendor_id", self.vendor_id), ("product_id", self.product_id)):
            if not 0 <= value <= _MAX_USB_ID:
                raise ConfigError(f"{label} must be a 16-bit value, got {value:#x}")


@dataclass(frozen=True)
class SessionReport:
    command: RelayCommand
    devices: tuple[DeviceDescriptor, ...]
    results: tuple[OperationResult, ...]

    @property
    def failures(self) -> tuple[OperationResult, ...]:
        return tuple(result for result in self.results if not result.ok)

    @property
    def ok(self) -> bool:
        return not self.failures
