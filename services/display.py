"""
Display service implementation for Chemion glasses
"""
import logging
from typing import Iterable, Optional

from services.session import DeviceSession
from utils.constants import UUIDS
from utils.exceptions import CharacteristicNotFoundError, TransportError, TransportWriteFailedError
from utils.logger import get_logger, user_guidance


class DisplayDispatcher:
    """Writes encoded frames to the bound glasses"""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 characteristic: str = UUIDS.UART_TX):
        self.logger = logger or get_logger()
        self.characteristic = characteristic

    def _find_characteristic(self, available) -> str:
        wanted = self.characteristic.lower()
        for uuid in available:
            if uuid.lower() == wanted:
                return uuid
        raise CharacteristicNotFoundError()

    async def display(self, session: DeviceSession, packets: Iterable[bytes]) -> None:
        """
        Send packets to the bound glasses, in order, without response.

        Writes are fire-and-forget: nothing is retried, and when a write fails
        the packets before it have already reached the glasses.

        Raises:
            NotConnectedError: if the session has no bound device
            PeripheralUnavailableError: if the bound device can't be resolved
            CharacteristicNotFoundError: if the UART write characteristic is missing
            TransportWriteFailedError: if a write fails; carries packets_written
        """
        packets = [bytes(p) for p in packets]
        async with session.lock:
            glasses = session.resolve_peripheral()
            characteristic = self._find_characteristic(glasses.characteristics())
            address = session.bound_address

            for index, packet in enumerate(packets):
                try:
                    await glasses.write(characteristic, packet, response=False)
                except TransportError as e:
                    self.logger.error(f"Write {index + 1}/{len(packets)} failed: {e}")
                    raise TransportWriteFailedError(index, len(packets)) from e
                self.logger.debug(f"Packet {index + 1}/{len(packets)} sent: {packet.hex()}")

        user_guidance(self.logger, f"[green]Frame sent to {address} ({len(packets)} packets)[/green]")
