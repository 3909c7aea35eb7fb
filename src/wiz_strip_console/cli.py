"""Command-line interface for wiz-strip-console."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .client import WizLightStrip
from .config import DEFAULT_CONFIG_FILE, DEVICES_ENV_VAR, StripConfig
from .errors import WizError
from .models import Scene, Status

LOGGER = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REJECTED = 2


def _scene_arg(value: str) -> Scene:
    try:
        return Scene.from_name(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"unknown scene {value!r} (run 'wiz-strip scenes' for the list)"
        ) from None


def _timeout_arg(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from None
    if timeout <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be greater than 0, got {value}")
    return timeout


def build_parser(config: StripConfig) -> argparse.ArgumentParser:
    """Build the argument parser, using configured defaults for optional values."""
    defaults = config.defaults
    parser = argparse.ArgumentParser(
        prog="wiz-strip",
        description="Control WiZ light strips over the local network.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-i", "--ip",
        dest="ips",
        action="append",
        default=[],
        metavar="IP",
        help="IP address or configured alias of a light strip (repeatable)",
    )
    parser.add_argument(
        "-g", "--group",
        dest="groups",
        action="append",
        default=[],
        metavar="GROUP",
        help="configured group of light strips (repeatable)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help=f"configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout_arg,
        default=defaults.timeout,
        help="seconds to wait for each device reply",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every datagram")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    dynamic = commands.add_parser("dynamic", help="play a dynamic scene")
    dynamic.add_argument("scene", type=_scene_arg, metavar="SCENE", help="scene name")
    dynamic.add_argument("speed", type=int, nargs="?", default=defaults.speed, help="10-200")
    dynamic.add_argument(
        "brightness", type=int, nargs="?", default=defaults.brightness, help="10-100"
    )

    static = commands.add_parser("static", help="show a static color")
    static.add_argument("red", type=int, help="0-255")
    static.add_argument("green", type=int, help="0-255")
    static.add_argument("blue", type=int, help="0-255")
    static.add_argument(
        "brightness", type=int, nargs="?", default=defaults.brightness, help="10-100"
    )

    commands.add_parser("on", help="turn the strip(s) on")
    commands.add_parser("off", help="turn the strip(s) off")
    commands.add_parser("status", help="show the current state of the strip(s)")
    commands.add_parser("scenes", help="list the available scenes")

    return parser


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_scenes(console: Console) -> None:
    table = Table(title="Scenes", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Id", justify="right")
    for scene in Scene:
        table.add_row(scene.cli_name, str(scene.value))
    console.print(table)


def _status_table(rows: list[tuple[str, Status]]) -> Table:
    table = Table(title="Light strips", box=box.ROUNDED)
    for column in ("Device", "MAC", "RSSI", "Power", "Scene", "Color", "Speed", "Dimming"):
        table.add_column(column)
    for address, status in rows:
        try:
            scene = Scene(status.scene_id).cli_name
        except ValueError:
            scene = "-" if status.scene_id == 0 else str(status.scene_id)
        table.add_row(
            address,
            status.mac,
            str(status.rssi),
            "[green]on[/]" if status.state else "[dim]off[/]",
            scene,
            f"{status.r},{status.g},{status.b}",
            str(status.speed),
            f"{status.dimming}%",
        )
    return table


def _run_status(strips: Sequence[WizLightStrip], console: Console) -> int:
    rows: list[tuple[str, Status]] = []
    try:
        for strip in strips:
            rows.append((strip.address, strip.get_status()))
    except WizError as exc:
        if rows:
            console.print(_status_table(rows))
        console.print(f"[red]{strip.address}: {escape(str(exc))}[/]")
        return EXIT_ERROR
    console.print(_status_table(rows))
    return EXIT_OK


def _run_command(
    strips: Sequence[WizLightStrip],
    action: Callable[[WizLightStrip], bool],
    console: Console,
) -> int:
    """Apply *action* to each strip in order, stopping at the first error."""
    exit_code = EXIT_OK
    for strip in strips:
        try:
            success = action(strip)
        except WizError as exc:
            console.print(f"[red]{strip.address}: {escape(str(exc))}[/]")
            return EXIT_ERROR
        if success:
            console.print(f"[green]{strip.address}: ok[/]")
        else:
            console.print(f"[yellow]{strip.address}: device reported failure[/]")
            exit_code = EXIT_REJECTED
    return exit_code


def _action_for(args: argparse.Namespace) -> Callable[[WizLightStrip], bool]:
    if args.command == "on":
        return lambda strip: strip.turn_on()
    if args.command == "off":
        return lambda strip: strip.turn_off()
    if args.command == "static":
        return lambda strip: strip.set_color(args.red, args.green, args.blue, args.brightness)
    if args.command == "dynamic":
        return lambda strip: strip.set_scene(args.scene, args.speed, args.brightness)
    raise ValueError(f"unknown command: {args.command}")


def _config_path(argv: Sequence[str]) -> Path:
    """Find ``--config`` before the full parse so configured defaults can apply."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path, default=DEFAULT_CONFIG_FILE)
    known, _ = pre.parse_known_args(argv)
    return known.config


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Run the CLI and return the process exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    console = console or Console()

    _configure_logging()
    config = StripConfig.load(_config_path(argv))
    parser = build_parser(config)
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "scenes":
        _print_scenes(console)
        return EXIT_OK

    try:
        addresses = config.resolve_targets(args.ips, args.groups)
    except KeyError as exc:
        parser.error(f"unknown group: {exc.args[0]}")
    if not addresses:
        addresses = config.env_targets() or []
    if not addresses:
        parser.error(f"no light strips given (use --ip, --group or ${DEVICES_ENV_VAR})")

    LOGGER.debug("Targets: %s", ", ".join(addresses))
    strips = [WizLightStrip(address, timeout=args.timeout) for address in addresses]

    if args.command == "status":
        return _run_status(strips, console)
    return _run_command(strips, _action_for(args), console)


if __name__ == "__main__":
    sys.exit(main())
