"""
Bluetooth specific functionality for Chemion glasses, built on bleak
"""
import asyncio
import logging
import os
import platform
from typing import Dict, List, Optional

from bleak import BleakClient, BleakScanner
from bleak.backends.device import BLEDevice
from bleak.exc import BleakError

from services.transport import Adapter, AdapterManager, Peripheral
from utils.exceptions import TransportError
from utils.logger import get_logger

# Everything bleak (or the OS underneath it) raises for link-level failures
_BLE_ERRORS = (BleakError, asyncio.TimeoutError, OSError)

_SYSFS_BLUETOOTH = "/sys/class/bluetooth"


class BleakPeripheral(Peripheral):
    """Peripheral backed by a BLEDevice and, once connected, a BleakClient"""

    def __init__(self, device: BLEDevice, name: Optional[str], adapter: 'BleakAdapter'):
        self._device = device
        self._name = name
        self._adapter = adapter
        self._client: Optional[BleakClient] = None
        self._characteristics: List[str] = []
        self.logger = adapter.logger

    @property
    def address(self) -> str:
        return self._device.address

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._client.is_connected

    def update(self, device: BLEDevice, name: Optional[str]):
        """Refresh advertisement data from a newer scan"""
        self._device = device
        if name:
            self._name = name

    def _handle_disconnect(self, client: BleakClient):
        # Session state is not touched; the next operation will fail instead
        self.logger.warning(f"Glasses {self.address} disconnected")

    async def connect(self, timeout: float) -> None:
        if self.is_connected:
            self.logger.debug(f"Already linked to {self.address}, reusing the connection")
            return
        kwargs = {"adapter": self._adapter.name} if self._adapter.explicit else {}
        client = BleakClient(
            self._device,
            disconnected_callback=self._handle_disconnect,
            timeout=timeout,
            **kwargs
        )
        try:
            await client.connect()
        except _BLE_ERRORS as e:
            raise TransportError(f"Connect to {self.address} failed: {e}") from e
        self._client = client
        self._characteristics = []

    async def disconnect(self) -> None:
        if self._client is None:
            raise TransportError(f"No link to {self.address}")
        try:
            await self._client.disconnect()
        except _BLE_ERRORS as e:
            raise TransportError(f"Disconnect from {self.address} failed: {e}") from e
        self._client = None
        self._characteristics = []

    async def discover_characteristics(self) -> None:
        # bleak resolves services while connecting; read them back here
        if not self.is_connected:
            raise TransportError(f"Not connected to {self.address}")
        try:
            services = self._client.services
            uuids = [char.uuid for char in services.characteristics.values()]
        except _BLE_ERRORS as e:
            raise TransportError(f"Service discovery on {self.address} failed: {e}") from e
        if not uuids:
            raise TransportError(f"No characteristics found on {self.address}")
        self._characteristics = uuids
        self.logger.debug(f"Characteristics of {self.address}: {', '.join(uuids)}")

    def characteristics(self) -> List[str]:
        return list(self._characteristics)

    async def write(self, uuid: str, data: bytes, response: bool = False) -> None:
        if not self.is_connected:
            raise TransportError(f"Not connected to {self.address}")
        try:
            await self._client.write_gatt_char(uuid, data, response=response)
        except _BLE_ERRORS as e:
            raise TransportError(f"Write to {self.address} failed: {e}") from e


class BleakAdapter(Adapter):
    """A local radio; scans with BleakScanner and remembers what it saw"""

    def __init__(self, name: Optional[str] = None, logger: Optional[logging.Logger] = None):
        self._name = name
        self.logger = logger or get_logger()
        self._scanner: Optional[BleakScanner] = None
        self._peripherals: Dict[str, BleakPeripheral] = {}
        self._last_seen: List[str] = []

    @property
    def name(self) -> str:
        return self._name or "default"

    @property
    def explicit(self) -> bool:
        """True when a specific adapter was requested"""
        return self._name is not None

    async def start_scan(self) -> None:
        kwargs = {"adapter": self._name} if self.explicit else {}
        scanner = BleakScanner(**kwargs)
        try:
            await scanner.start()
        except _BLE_ERRORS as e:
            raise TransportError(f"Scan on adapter {self.name} failed: {e}") from e
        self._scanner = scanner
        self.logger.debug(f"Scan started on adapter {self.name}")

    async def stop_scan(self) -> None:
        if self._scanner is None:
            return
        scanner, self._scanner = self._scanner, None
        try:
            await scanner.stop()
        except _BLE_ERRORS as e:
            raise TransportError(f"Stopping scan on adapter {self.name} failed: {e}") from e

        self._last_seen = []
        for address, (device, adv) in scanner.discovered_devices_and_advertisement_data.items():
            name = adv.local_name or device.name
            self.logger.debug(f"  {name} ({address})")
            known = self._peripherals.get(address.upper())
            if known:
                known.update(device, name)
            else:
                self._peripherals[address.upper()] = BleakPeripheral(device, name, self)
            self._last_seen.append(address.upper())

    async def peripherals(self) -> List[Peripheral]:
        return [self._peripherals[address] for address in self._last_seen]

    def peripheral(self, address: str) -> Optional[Peripheral]:
        return self._peripherals.get(address.strip().upper())


class BleakAdapterManager(AdapterManager):
    """
    Lists local adapters.

    bleak has no adapter enumeration of its own. On Linux the hciN devices are
    read from sysfs; elsewhere the OS default radio is the only adapter.
    """

    def __init__(self, adapter: Optional[str] = None, logger: Optional[logging.Logger] = None):
        self._adapter = adapter
        self.logger = logger or get_logger()

    def _linux_adapters(self) -> List[str]:
        try:
            names = os.listdir(_SYSFS_BLUETOOTH)
        except OSError as e:
            self.logger.debug(f"Can't list {_SYSFS_BLUETOOTH}: {e}")
            return []
        return sorted(n for n in names if n.startswith("hci") and ":" not in n)

    async def adapters(self) -> List[Adapter]:
        if self._adapter:
            return [BleakAdapter(self._adapter, self.logger)]
        if platform.system() == "Linux":
            return [BleakAdapter(name, self.logger) for name in self._linux_adapters()]
        return [BleakAdapter(None, self.logger)]
