"""
Base connector class for Chemion glasses
"""
from typing import Any, Iterable, List, Mapping, Optional, Union

from rich.console import Console
from rich.table import Table

from connector.bluetooth import BleakAdapterManager
from services.transport import AdapterManager
from services import encoder
from services.display import DisplayDispatcher
from services.frame import DeviceDescriptor, EncodedFrame, PixelFrame, validate_packets
from services.session import DeviceSession
from utils.config import Config
from utils.constants import STATE_COLORS, StateColors
from utils.exceptions import GlassesError
from utils.logger import get_console, setup_logger

FrameInput = Union[PixelFrame, Mapping[str, Any], Iterable[Iterable[int]]]
PacketsInput = Union[EncodedFrame, Mapping[str, Any], Iterable[Iterable[int]]]


class GlassesConnector:
    """
    Main connector class for Chemion glasses

    Usage:
        async with GlassesConnector() as glasses:
            await glasses.connect("Chemion", "AA:BB:CC:DD:EE:FF")
            await glasses.show(PixelFrame.blank())

    Every failure raises a GlassesError; its `message` is safe to show users.
    """

    def __init__(self, config: Optional[Config] = None,
                 adapter_manager: Optional[AdapterManager] = None,
                 console: Optional[Console] = None):
        """Initialize connector with optional config and transport"""
        self.config = config or Config.load()
        self.logger = setup_logger(self.config)
        self.console = console or get_console()

        self.adapter_manager = adapter_manager or BleakAdapterManager(
            self.config.adapter, self.logger
        )
        self.session = DeviceSession(self.adapter_manager, self.config, self.logger)
        self.dispatcher = DisplayDispatcher(self.logger)
        self.last_error: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self.session.is_connected

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Disconnect on exit; an error from the body takes precedence"""
        if self.session.is_connected:
            try:
                await self.disconnect()
            except GlassesError:
                if exc_type is None:
                    raise
        return False

    def _record(self, error: GlassesError):
        self.last_error = error.message
        self.logger.debug(f"{type(error).__name__}: {error.message}")

    async def discover(self) -> List[DeviceDescriptor]:
        """Named BLE devices around"""
        try:
            return await self.session.discover()
        except GlassesError as e:
            self._record(e)
            raise

    async def connect(self, device_name: Optional[str], device_address: str) -> None:
        """Connect to the glasses at `device_address` and remember them"""
        try:
            await self.session.connect(device_address, device_name)
        except GlassesError as e:
            self._record(e)
            raise

        self.config.last_address = self.session.bound_address
        self.config.last_name = device_name or self.session.state.name

    async def disconnect(self) -> None:
        try:
            await self.session.disconnect()
        except GlassesError as e:
            self._record(e)
            raise

    @staticmethod
    def encode(frame: FrameInput) -> EncodedFrame:
        """Encode a pixel frame; touches no device"""
        if isinstance(frame, Mapping):
            frame = PixelFrame.from_dict(frame)
        elif not isinstance(frame, PixelFrame):
            frame = PixelFrame(frame)
        return encoder.encode(frame)

    async def display(self, frame: PacketsInput) -> None:
        """Send an already encoded frame to the connected glasses"""
        try:
            if isinstance(frame, Mapping):
                frame = EncodedFrame.from_dict(frame)
            elif not isinstance(frame, EncodedFrame):
                frame = EncodedFrame(validate_packets(frame))
            await self.dispatcher.display(self.session, frame.packets)
        except GlassesError as e:
            self._record(e)
            raise

    async def show(self, frame: FrameInput) -> EncodedFrame:
        """Encode and display a pixel frame"""
        try:
            encoded = self.encode(frame)
        except GlassesError as e:
            self._record(e)
            raise
        await self.display(encoded)
        return encoded

    def blank_frame(self) -> PixelFrame:
        """All-off frame sized to the configured display"""
        return PixelFrame.blank(self.config.display_width, self.config.display_height)

    async def clear(self) -> EncodedFrame:
        """Turn every LED off"""
        return await self.show(self.blank_frame())

    def status_table(self) -> Table:
        """Current session as a rich table"""
        table = Table(show_header=True, header_style="bold magenta", title="Chemion Glasses Status")
        table.add_column("Status", style="dim")
        table.add_column("Value")

        state = self.session.connection_state
        color = STATE_COLORS.get(state, "white")
        table.add_row("Connection", f"[{color}]{state.value}[/{color}]")

        if self.session.is_connected:
            bound = self.session.state
            table.add_row("Device", f"{bound.name or 'Unknown'} ({bound.address})")
            table.add_row("Adapter", bound.adapter.name)
        elif self.config.last_address:
            table.add_row(
                "Last Device",
                f"[{StateColors.NEUTRAL}]{self.config.last_name or 'Unknown'} ({self.config.last_address})[/{StateColors.NEUTRAL}]"
            )

        table.add_row("Rebind Policy", self.config.rebind_policy)

        if self.last_error:
            table.add_row("Last Error", f"[{StateColors.ERROR}]{self.last_error}[/{StateColors.ERROR}]")

        return table

    def print_status(self):
        self.console.print(self.status_table())
