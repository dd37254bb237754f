"""In-memory BLE transport for testing sessions and dispatch."""

from typing import List, Optional

import pytest

from services.transport import Adapter, AdapterManager, Peripheral, same_address
from utils.config import Config
from utils.constants import UUIDS
from utils.exceptions import TransportError

GLASSES_A = "AA:AA:AA:AA:AA:01"
GLASSES_B = "BB:BB:BB:BB:BB:02"


class FakePeripheral(Peripheral):
    def __init__(self, address: str, name: Optional[str] = "CHEMION_GLASSES",
                 characteristics: Optional[List[str]] = None):
        self._address = address
        self._name = name
        self._available = characteristics if characteristics is not None else [
            UUIDS.UART_TX.lower(), UUIDS.UART_RX.lower()
        ]
        self._characteristics: List[str] = []
        self.connected = False
        self.writes = []
        self.fail_connect = False
        self.fail_discover = False
        self.fail_disconnect = False
        self.fail_write_at: Optional[int] = None
        self.disconnect_calls = 0

    @property
    def address(self) -> str:
        return self._address

    @property
    def name(self) -> Optional[str]:
        return self._name

    async def connect(self, timeout: float) -> None:
        if self.fail_connect:
            raise TransportError("connection refused")
        self.connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        if self.fail_disconnect:
            raise TransportError("disconnect refused")
        self.connected = False
        self._characteristics = []

    async def discover_characteristics(self) -> None:
        if self.fail_discover:
            raise TransportError("service discovery failed")
        self._characteristics = list(self._available)

    def characteristics(self) -> List[str]:
        return list(self._characteristics)

    async def write(self, uuid: str, data: bytes, response: bool = False) -> None:
        if not self.connected:
            raise TransportError("not connected")
        if self.fail_write_at is not None and len(self.writes) == self.fail_write_at:
            raise TransportError("write failed")
        self.writes.append((uuid, bytes(data), response))


class FakeAdapter(Adapter):
    def __init__(self, name: str = "hci0", peripherals: Optional[List[FakePeripheral]] = None):
        self._name = name
        self.visible = list(peripherals or [])
        self._known = {}
        self._seen: List[FakePeripheral] = []
        self.scanning = False
        self.scans = 0
        self.fail_scan = False

    @property
    def name(self) -> str:
        return self._name

    async def start_scan(self) -> None:
        if self.fail_scan:
            raise TransportError("adapter powered off")
        assert not self.scanning, "overlapping scans"
        self.scanning = True
        self.scans += 1

    async def stop_scan(self) -> None:
        self.scanning = False
        self._seen = list(self.visible)
        for p in self._seen:
            self._known[p.address.upper()] = p

    async def peripherals(self) -> List[Peripheral]:
        return list(self._seen)

    def peripheral(self, address: str) -> Optional[Peripheral]:
        for known, p in self._known.items():
            if same_address(known, address):
                return p
        return None

    def forget(self, address: str):
        self._known.pop(address.upper(), None)


class FakeAdapterManager(AdapterManager):
    def __init__(self, adapters: Optional[List[FakeAdapter]] = None):
        self._adapters = adapters if adapters is not None else []
        self.calls = 0

    async def adapters(self) -> List[Adapter]:
        self.calls += 1
        return list(self._adapters)


@pytest.fixture
def config():
    """Quiet configuration with no scan delay."""
    return Config(log_file=None, console_log=False, scan_window=0)


@pytest.fixture
def glasses_a():
    return FakePeripheral(GLASSES_A, "CHEMION_A")


@pytest.fixture
def glasses_b():
    return FakePeripheral(GLASSES_B, "CHEMION_B")


@pytest.fixture
def adapter(glasses_a, glasses_b):
    return FakeAdapter("hci0", [glasses_a, glasses_b, FakePeripheral("CC:CC:CC:CC:CC:03", None)])


@pytest.fixture
def manager(adapter):
    return FakeAdapterManager([adapter])
