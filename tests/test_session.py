from __future__ import annotations

import pytest

from hidrelay.core.controller import Hold
from hidrelay.core.errors import (
    ConfigError,
    DeviceOpenError,
    NoDevicesFoundError,
    SessionStateError,
    TransportInitError,
    TransportShutdownError,
)
from hidrelay.core.model import DeviceDescriptor, FailureReason, RelayCommand, RelayConfig, SessionState
from hidrelay.core.session import RelaySession


class FakeTransport:
    def __init__(
        self,
        devices: list[DeviceDescriptor] | None = None,
        *,
        init_error: bool = False,
        shutdown_error: bool = False,
        fail_open: tuple[str, ...] = (),
    ) -> None:
        self.devices = devices or []
        self.init_error = init_error
        self.shutdown_error = shutdown_error
        self.fail_open = set(fail_open)
        self.initialized = False
        self.calls: list[tuple] = []

    def init(self) -> None:
        self.calls.append(("init",))
        if self.init_error:
            raise TransportInitError("hid_init failed")
        self.initialized = True

    def enumerate(self, vendor_id: int, product_id: int) -> list[DeviceDescriptor]:
        self.calls.append(("enumerate", vendor_id, product_id))
        return list(self.devices)

    def open(self, path: str) -> str:
        self.calls.append(("open", path))
        if path in self.fail_open:
            raise DeviceOpenError(f"unable to open device {path}")
        return path

    def write(self, handle: str, data: bytes) -> int:
        self.calls.append(("write", handle, data[0]))
        return len(data)

    def close(self, handle: str) -> None:
        self.calls.append(("close", handle))

    def shutdown(self) -> None:
        self.calls.append(("shutdown",))
        self.initialized = False
        if self.shutdown_error:
            raise TransportShutdownError("hid_exit failed")

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


def _devices(*paths: str) -> list[DeviceDescriptor]:
    return [DeviceDescriptor(vendor_id=0x0519, product_id=0x2018, path=p) for p in paths]


def _session(transport: FakeTransport, sleeps: list[float] | None = None, **config) -> RelaySession:
    hold = Hold(sleep=(sleeps if sleeps is not None else []).append)
    return RelaySession(RelayConfig(**config), transport=transport, hold=hold)


def test_set_on_two_devices() -> None:
    transport = FakeTransport(_devices("a", "b"))

    with _session(transport) as session:
        report = session.apply(RelayCommand.ON)

    assert report.ok
    assert [r.device.path for r in report.results] == ["a", "b"]
    assert [c for c in transport.calls if c[0] == "write"] == [("write", "a", 241), ("write", "b", 241)]
    assert session.state is SessionState.CLOSED
    assert transport.count("shutdown") == 1


def test_no_devices_is_fatal_and_writes_nothing() -> None:
    transport = FakeTransport([])

    with pytest.raises(NoDevicesFoundError):
        with _session(transport) as session:
            session.apply(RelayCommand.ON)

    assert transport.count("open") == 0
    assert transport.count("write") == 0
    assert transport.count("shutdown") == 1


def test_enumerates_configured_ids() -> None:
    transport = FakeTransport(_devices("a"))

    with _session(transport, vendor_id=0x16C0, product_id=0x05DF) as session:
        session.apply(RelayCommand.OFF)

    assert ("enumerate", 0x16C0, 0x05DF) in transport.calls


def test_toggle_single_device() -> None:
    transport = FakeTransport(_devices("a"))
    sleeps: list[float] = []

    with _session(transport, sleeps) as session:
        report = session.apply(RelayCommand.TOGGLE)

    assert [c for c in transport.calls if c[0] == "write"] == [("write", "a", 241), ("write", "a", 1)]
    assert sleeps == [2.0]
    assert len(report.results) == 2


def test_first_device_open_failure_is_recorded() -> None:
    transport = FakeTransport(_devices("a", "b"), fail_open=("a",))

    with _session(transport) as session:
        report = session.apply(RelayCommand.ON)

    assert report.results[0].failure is FailureReason.OPEN_FAILED
    assert report.results[1].ok
    assert report.failures == (report.results[0],)
    assert not report.ok


def test_init_failure_propagates_without_shutdown() -> None:
    transport = FakeTransport(_devices("a"), init_error=True)
    session = _session(transport)

    with pytest.raises(TransportInitError):
        session.open()

    assert session.state is SessionState.UNINITIALIZED
    assert transport.count("enumerate") == 0


def test_shutdown_failure_is_recorded_not_raised() -> None:
    transport = FakeTransport(_devices("a"), shutdown_error=True)

    with _session(transport) as session:
        report = session.apply(RelayCommand.ON)

    assert report.ok
    assert isinstance(session.shutdown_error, TransportShutdownError)


def test_close_runs_shutdown_exactly_once() -> None:
    transport = FakeTransport(_devices("a"))
    session = _session(transport)
    session.open()
    session.close()
    session.close()

    assert transport.count("shutdown") == 1


def test_closed_session_cannot_reopen_or_enumerate() -> None:
    transport = FakeTransport(_devices("a"))
    session = _session(transport)
    with session:
        pass

    with pytest.raises(SessionStateError):
        session.open()
    with pytest.raises(SessionStateError):
        session.list_devices()
    assert transport.count("init") == 1


def test_apply_before_open_is_rejected() -> None:
    transport = FakeTransport(_devices("a"))
    with pytest.raises(SessionStateError):
        _session(transport).apply(RelayCommand.ON)
    assert transport.calls == []


def test_verbose_session_echoes_devices() -> None:
    transport = FakeTransport(_devices("a"))
    lines: list[str] = []
    session = RelaySession(RelayConfig(verbose=True), transport=transport, echo=lines.append)

    with session:
        devices = session.list_devices()

    assert devices == _devices("a")
    assert lines[0] == "1 device(s) found"
    assert "  path: a" in lines


def test_config_rejects_out_of_range_ids() -> None:
    with pytest.raises(ConfigError):
        RelayConfig(vendor_id=0x10000)
    with pytest.raises(ConfigError):
        RelayConfig(product_id=-1)
