"""
Transport capability surface used by the session and display services

Anything that can scan, connect and write to a BLE peripheral can drive the
glasses. connector.bluetooth implements it on top of bleak; tests use an
in-memory fake. Implementations raise utils.exceptions.TransportError for
every link-level failure.
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class Peripheral(ABC):
    """A BLE peripheral seen by an adapter"""

    @property
    @abstractmethod
    def address(self) -> str:
        """Bluetooth address, string form"""

    @property
    @abstractmethod
    def name(self) -> Optional[str]:
        """Advertised local name, None if the device advertises none"""

    @abstractmethod
    async def connect(self, timeout: float) -> None:
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        ...

    @abstractmethod
    async def discover_characteristics(self) -> None:
        """Populate characteristics(); called once after connect"""

    @abstractmethod
    def characteristics(self) -> List[str]:
        """UUIDs of the characteristics found by discover_characteristics()"""

    @abstractmethod
    async def write(self, uuid: str, data: bytes, response: bool = False) -> None:
        ...


class Adapter(ABC):
    """A local Bluetooth radio"""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def start_scan(self) -> None:
        ...

    @abstractmethod
    async def stop_scan(self) -> None:
        ...

    @abstractmethod
    async def peripherals(self) -> List[Peripheral]:
        """Peripherals found by the last scan"""

    @abstractmethod
    def peripheral(self, address: str) -> Optional[Peripheral]:
        """Known peripheral by address, None if the adapter has never seen it"""


class AdapterManager(ABC):
    """Entry point of a transport: lists local adapters"""

    @abstractmethod
    async def adapters(self) -> List[Adapter]:
        ...


def same_address(a: str, b: str) -> bool:
    """Compare Bluetooth addresses regardless of case"""
    return a.strip().upper() == b.strip().upper()
