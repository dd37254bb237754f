"""
Chemion glasses SDK - Exceptions
"""
from typing import Any, Dict


class GlassesError(Exception):
    """Base exception for the Chemion glasses SDK"""
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Structured error body for front ends"""
        return {"message": self.message}


class TransportError(GlassesError):
    """Raised by a BLE transport implementation"""
    default_message = "Bluetooth transport error"


# Encoding

class EncodingError(GlassesError):
    """Frame could not be encoded"""
    default_message = "Couldn't encode frame"


class InvalidPixelValueError(EncodingError):
    """Pixel intensity outside 0-3"""

    def __init__(self, row: int, column: int, value: Any):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"Wrong value in frame: {value!r} at row {row}, column {column} (expected 0-3)"
        )


class InvalidPacketError(EncodingError):
    """Encoded packet is not a valid transport packet"""
    default_message = "Wrong value in encoded frame"


# Session and dispatch

class SessionError(GlassesError):
    """Session operation failed"""


class DispatchError(GlassesError):
    """Frame could not be sent to the glasses"""


class NotConnectedError(SessionError, DispatchError):
    """Operation requires a connected device"""
    default_message = "Please connect to a device first"


class PeripheralUnavailableError(SessionError, DispatchError):
    """Bound device can't be resolved through the bound adapter"""
    default_message = "Couldn't get glasses"


class NoAdapterError(SessionError):
    default_message = "Couldn't get Bluetooth adapter"


class ScanFailedError(SessionError):
    default_message = "Couldn't scan for devices"


class PeripheralNotFoundError(SessionError):
    default_message = "Couldn't find glasses"


class ConnectFailedError(SessionError):
    default_message = "Couldn't reach glasses"


class CapabilityDiscoveryFailedError(SessionError):
    default_message = "Couldn't connect to the glasses"


class AlreadyConnectedError(SessionError):
    default_message = "Already connected, disconnect first"


class DisconnectFailedError(SessionError):
    default_message = "Couldn't disconnect the glasses"


class CharacteristicNotFoundError(DispatchError):
    default_message = "Couldn't find write characteristic"


class TransportWriteFailedError(DispatchError):
    """Write failed part way through a frame; earlier packets stay sent"""

    def __init__(self, packets_written: int, packets_total: int):
        self.packets_written = packets_written
        self.packets_total = packets_total
        super().__init__(
            f"Couldn't send frame: write failed after {packets_written} of {packets_total} packets"
        )
