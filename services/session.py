"""
Device session for Chemion glasses

Holds the one peripheral the SDK is bound to. The binding is a tagged
variant: Disconnected, or Connected with both the address and the adapter it
was reached through. Every operation runs under the session lock, including
the scan window.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from services.transport import Adapter, AdapterManager, Peripheral, same_address
from services.frame import DeviceDescriptor
from utils.config import Config
from utils.constants import ConnectionState, RebindPolicy
from utils.exceptions import (
    AlreadyConnectedError,
    CapabilityDiscoveryFailedError,
    ConnectFailedError,
    DisconnectFailedError,
    NoAdapterError,
    NotConnectedError,
    PeripheralNotFoundError,
    PeripheralUnavailableError,
    ScanFailedError,
    TransportError,
)
from utils.logger import get_logger, user_guidance


@dataclass(frozen=True)
class Disconnected:
    """No device bound"""


@dataclass(frozen=True)
class Connected:
    """Bound to `address`, reached through `adapter`"""
    address: str
    adapter: Adapter
    name: Optional[str] = None


SessionState = Union[Disconnected, Connected]


class DeviceSession:
    """Single glasses session: discover, connect, disconnect"""

    def __init__(self, adapter_manager: AdapterManager, config: Optional[Config] = None,
                 logger: Optional[logging.Logger] = None):
        self.adapter_manager = adapter_manager
        self.config = config or Config()
        self.logger = logger or get_logger()
        self.lock = asyncio.Lock()
        self._state: SessionState = Disconnected()
        self._connection_state = ConnectionState.DISCONNECTED
        self._state_callbacks: List[Callable] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return isinstance(self._state, Connected)

    @property
    def bound_address(self) -> Optional[str]:
        return self._state.address if isinstance(self._state, Connected) else None

    @property
    def adapter_handle(self) -> Optional[Adapter]:
        return self._state.adapter if isinstance(self._state, Connected) else None

    @property
    def connection_state(self) -> ConnectionState:
        """Coarse progress indicator for status displays"""
        return self._connection_state

    def _set_connection_state(self, state: ConnectionState):
        if state != self._connection_state:
            self._connection_state = state
            self.logger.debug(f"Connection state changed to: {state.value}")
            for callback in self._state_callbacks:
                try:
                    callback(state)
                except Exception as e:
                    self.logger.error(f"Error in state callback: {e}")

    def _settle(self):
        """Connection state back in line with the binding"""
        self._set_connection_state(
            ConnectionState.CONNECTED if self.is_connected else ConnectionState.DISCONNECTED
        )

    def add_state_callback(self, callback: Callable):
        """Call `callback(ConnectionState)` on every progress change"""
        if callback not in self._state_callbacks:
            self._state_callbacks.append(callback)

    def remove_state_callback(self, callback: Callable):
        if callback in self._state_callbacks:
            self._state_callbacks.remove(callback)

    def resolve_peripheral(self) -> Peripheral:
        """
        Bound peripheral, looked up through the bound adapter.

        Caller must hold the lock.

        Raises:
            NotConnectedError: if no device is bound
            PeripheralUnavailableError: if the adapter no longer knows it
        """
        state = self._state
        if not isinstance(state, Connected):
            raise NotConnectedError()
        peripheral = state.adapter.peripheral(state.address)
        if peripheral is None:
            self.logger.error(f"Adapter {state.adapter.name} has no peripheral {state.address}")
            raise PeripheralUnavailableError()
        return peripheral

    async def _acquire_adapter(self) -> Adapter:
        """Bound adapter if there is one, else the first available"""
        if isinstance(self._state, Connected):
            return self._state.adapter
        try:
            adapters = await self.adapter_manager.adapters()
        except TransportError as e:
            self.logger.error(f"Listing adapters failed: {e}")
            raise NoAdapterError() from e
        if not adapters:
            self.logger.error("No Bluetooth adapter available")
            raise NoAdapterError()
        return adapters[0]

    async def _scan(self, adapter: Adapter) -> List[Peripheral]:
        """Scan for the discovery window and return what was seen"""
        self._set_connection_state(ConnectionState.SCANNING)
        self.logger.debug(f"Scanning on {adapter.name} for {self.config.scan_window}s")
        try:
            await adapter.start_scan()
            try:
                await asyncio.sleep(self.config.scan_window)
            finally:
                await adapter.stop_scan()
            return await adapter.peripherals()
        except TransportError as e:
            self.logger.error(f"Scan failed: {e}")
            raise ScanFailedError() from e

    async def discover(self) -> List[DeviceDescriptor]:
        """
        Scan and list every peripheral advertising a name.

        Raises:
            NoAdapterError: if no adapter is available
            ScanFailedError: if the scan itself fails
        """
        async with self.lock:
            try:
                adapter = await self._acquire_adapter()
                peripherals = await self._scan(adapter)
            finally:
                self._settle()

        devices = [
            DeviceDescriptor(address=p.address, name=p.name)
            for p in peripherals
            if p.name
        ]
        self.logger.info(f"Found {len(devices)} named device(s)")
        return devices

    async def connect(self, target_address: str, device_name: Optional[str] = None) -> None:
        """
        Scan for `target_address`, connect and bind the session to it.

        Any failure leaves the session as it was.

        Raises:
            AlreadyConnectedError: if bound and the rebind policy forbids it
            NoAdapterError, ScanFailedError: as for discover()
            PeripheralNotFoundError: if the scan didn't see the address
            ConnectFailedError: if the link couldn't be established
            CapabilityDiscoveryFailedError: if characteristics couldn't be read
        """
        async with self.lock:
            try:
                await self._connect(target_address, device_name)
            finally:
                self._settle()

    async def _connect(self, target_address: str, device_name: Optional[str]) -> None:
        previous = self._state
        if isinstance(previous, Connected):
            if self.config.rebind_policy == RebindPolicy.REQUIRE_DISCONNECT.value:
                raise AlreadyConnectedError(
                    f"Already connected to {previous.address}, disconnect first"
                )
            self.logger.warning(
                f"Rebinding from {previous.address} to {target_address} without disconnecting"
            )

        adapter = await self._acquire_adapter()
        peripherals = await self._scan(adapter)

        glasses = next((p for p in peripherals if same_address(p.address, target_address)), None)
        if glasses is None:
            self.logger.error(f"{target_address} not seen during scan")
            raise PeripheralNotFoundError()

        self._set_connection_state(ConnectionState.CONNECTING)
        self.logger.info(f"Connecting to {device_name or glasses.name or glasses.address}...")
        try:
            await glasses.connect(self.config.connection_timeout)
        except TransportError as e:
            self.logger.error(f"Connection failed: {e}")
            raise ConnectFailedError() from e

        try:
            await glasses.discover_characteristics()
        except TransportError as e:
            self.logger.error(f"Characteristic discovery failed: {e}")
            await self._drop_link(glasses)
            raise CapabilityDiscoveryFailedError() from e

        self._state = Connected(
            address=glasses.address,
            adapter=adapter,
            name=device_name or glasses.name,
        )
        user_guidance(self.logger, f"[green]Connected to {self._state.name or glasses.address}[/green]")

    async def _drop_link(self, peripheral: Peripheral):
        """Close a link that never made it into the session"""
        try:
            await peripheral.disconnect()
        except TransportError as e:
            self.logger.warning(f"Couldn't close half-open link to {peripheral.address}: {e}")

    async def disconnect(self) -> None:
        """
        Disconnect the bound device and clear the session.

        Raises:
            NotConnectedError: if no device is bound
            PeripheralUnavailableError: if the bound device can't be resolved
            DisconnectFailedError: if the link-layer disconnect fails
        """
        async with self.lock:
            try:
                peripheral = self.resolve_peripheral()
                self._set_connection_state(ConnectionState.DISCONNECTING)
                try:
                    await peripheral.disconnect()
                except TransportError as e:
                    self.logger.error(f"Disconnect failed: {e}")
                    raise DisconnectFailedError() from e
                address = self.bound_address
                self._state = Disconnected()
                self.logger.info(f"Disconnected from {address}")
            finally:
                self._settle()
