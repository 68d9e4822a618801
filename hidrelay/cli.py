"""Typer CLI entrypoint."""

from __future__ import annotations

import typer

from hidrelay.core.enumerator import describe_device
from hidrelay.core.errors import HidRelayError, NoDevicesFoundError
from hidrelay.core.model import DEFAULT_PRODUCT_ID, DEFAULT_VENDOR_ID, RelayCommand, RelayConfig, SessionReport
from hidrelay.core.session import RelaySession
from hidrelay.transports.hidapi import HidapiTransport

app = typer.Typer(
    help="Switch USB HID relay boards on, off, or toggle them",
    add_help_option=False,
    rich_markup_mode=None,
)


def _echo_err(line: str) -> None:
    typer.echo(line, err=True)


def _help_callback(ctx: typer.Context, value: bool) -> None:
    if value:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)


_COMMANDS_KEY = "hidrelay.commands"


def _command_flag(command: RelayCommand):
    """Record `command` when its flag is given. Click runs these callbacks in command-line order."""

    def callback(ctx: typer.Context, value: bool) -> bool:
        if value:
            ctx.meta.setdefault(_COMMANDS_KEY, []).append(command)
        return value

    return callback


def _resolve_command(ctx: typer.Context) -> RelayCommand:
    selected = ctx.meta.get(_COMMANDS_KEY)
    return selected[-1] if selected else RelayCommand.TOGGLE


def _print_report(report: SessionReport) -> None:
    for failure in report.failures:
        _echo_err(f"Warning: {failure.device.path}: {failure.failure.value} ({failure.detail})")
    succeeded = len(report.results) - len(report.failures)
    typer.echo(
        f"{report.command.value}: {succeeded}/{len(report.results)} write(s) succeeded "
        f"on {len(report.devices)} device(s)"
    )


@app.command(add_help_option=False)
def main(
    ctx: typer.Context,
    on: bool = typer.Option(
        False, "--on", "-1", callback=_command_flag(RelayCommand.ON), help="Change state of the relay to on."
    ),
    off: bool = typer.Option(
        False, "--off", "-0", callback=_command_flag(RelayCommand.OFF), help="Change state of the relay to off."
    ),
    toggle: bool = typer.Option(
        False,
        "--toggle",
        "-t",
        callback=_command_flag(RelayCommand.TOGGLE),
        help="Toggle on and off state with 2s delay (default). The last state flag given wins.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging messages."),
    list_only: bool = typer.Option(False, "--list", "-l", help="List all available devices and exit."),
    device_id: str | None = typer.Option(
        None,
        "--id",
        "-i",
        help=f"Modify id of the device (not supported). Default: {DEFAULT_VENDOR_ID:04x}:{DEFAULT_PRODUCT_ID:04x}",
    ),
    help_: bool = typer.Option(
        False,
        "--help",
        "-h",
        is_eager=True,
        callback=_help_callback,
        help="Display this help and exit.",
    ),
) -> None:
    """Discover relay boards by vendor/product id and switch every one of them."""
    command = _resolve_command(ctx)
    if verbose:
        _echo_err("verbose flag is set")
    if device_id is not None:
        _echo_err(f"Warning: --id {device_id} is not supported; using {DEFAULT_VENDOR_ID:04x}:{DEFAULT_PRODUCT_ID:04x}")

    # --list prints the device blocks itself.
    config = RelayConfig(verbose=verbose and not list_only, device_id=device_id)
    session = RelaySession(config, transport=HidapiTransport(), echo=_echo_err)
    try:
        with session:
            if list_only:
                devices = session.list_devices()
                if not devices:
                    raise NoDevicesFoundError("No relay board has been found.")
                for index, device in enumerate(devices, start=1):
                    for line in describe_device(index, device):
                        typer.echo(line)
                report = None
            else:
                report = session.apply(command)
    except HidRelayError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if report is not None:
        _print_report(report)
    if session.shutdown_error is not None:
        typer.echo(f"Error: {session.shutdown_error}", err=True)
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
