#!/usr/bin/env python3
"""
Chemion glasses CLI

Usage:
    chemion scan                          # List named BLE devices
    chemion encode frame.txt              # Print UART packets for a frame
    chemion show frame.txt                # Show a frame on the last glasses
    chemion show frame.json --address AA:BB:CC:DD:EE:FF
    chemion clear                         # Turn every LED off
    chemion status                        # Configuration and last device

Frame files are either JSON ({"glasses_frame": [[0, 1, 2, 3, ...], ...]})
or a text grid with one digit (0-3) per pixel and one row per line.
"""
import argparse
import asyncio
import json
import sys
from typing import Optional

from rich.table import Table

from connector.base import GlassesConnector
from services.frame import PixelFrame
from utils.config import Config
from utils.exceptions import GlassesError


def load_frame(path: str) -> PixelFrame:
    """Read a JSON or text-grid frame file"""
    with open(path, 'r') as f:
        text = f.read()
    if text.lstrip().startswith("{"):
        return PixelFrame.from_dict(json.loads(text))
    return PixelFrame.from_text(text)


async def cmd_scan(glasses: GlassesConnector):
    """Scan for devices"""
    glasses.console.print("[yellow]Scanning for devices...[/yellow]")
    devices = await glasses.discover()

    if not devices:
        glasses.console.print("No named devices found.")
        return

    table = Table(title=f"Found {len(devices)} device(s)")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Address")
    for i, d in enumerate(devices, 1):
        table.add_row(str(i), d.name, d.address)
    glasses.console.print(table)


def cmd_encode(glasses: GlassesConnector, path: str, as_json: bool):
    """Print packets for a frame file"""
    encoded = glasses.encode(load_frame(path))
    if as_json:
        glasses.console.print_json(data=encoded.to_dict())
        return
    for i, packet in enumerate(encoded.hex(), 1):
        glasses.console.print(f"{i:>3}  {packet}")


async def cmd_show(glasses: GlassesConnector, frame: Optional[PixelFrame],
                   address: Optional[str], name: Optional[str]):
    """Connect, show a frame (blank when None), disconnect"""
    address = address or glasses.config.last_address
    if not address:
        raise ValueError("No address given and no remembered glasses. Run 'chemion scan' first.")

    async with glasses:
        await glasses.connect(name or glasses.config.last_name, address)
        glasses.config.save()
        if frame is None:
            await glasses.clear()
        else:
            await glasses.show(frame)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chemion",
        description="Control Chemion LED glasses over Bluetooth Low Energy",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("scan", help="List named BLE devices")

    encode = sub.add_parser("encode", help="Print UART packets for a frame file")
    encode.add_argument("file")
    encode.add_argument("--json", action="store_true", help="Print the glasses_frame JSON body")

    show = sub.add_parser("show", help="Display a frame file on the glasses")
    show.add_argument("file")
    show.add_argument("--address", help="Glasses address (default: last connected)")
    show.add_argument("--name", help="Glasses name, for logs and the config file")

    clear = sub.add_parser("clear", help="Turn every LED off")
    clear.add_argument("--address", help="Glasses address (default: last connected)")
    clear.add_argument("--name", help="Glasses name, for logs and the config file")

    sub.add_parser("status", help="Show configuration and remembered glasses")
    return parser


async def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    glasses = GlassesConnector(Config.load())
    try:
        if args.command == "scan":
            await cmd_scan(glasses)
        elif args.command == "encode":
            cmd_encode(glasses, args.file, args.json)
        elif args.command == "show":
            await cmd_show(glasses, load_frame(args.file), args.address, args.name)
        elif args.command == "clear":
            await cmd_show(glasses, None, args.address, args.name)
        elif args.command == "status":
            glasses.print_status()
    except GlassesError as e:
        glasses.console.print(f"[red]Error: {e.message}[/red]")
        return 1
    except (OSError, ValueError) as e:
        glasses.console.print(f"[red]Error: {e}[/red]")
        return 1
    return 0


def cli_main():
    """Synchronous entry point for CLI"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
