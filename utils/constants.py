"""Constants for Chemion glasses SDK"""
from enum import Enum


class ConnectionState(str, Enum):
    """Connection states for the glasses session"""
    DISCONNECTED = "Disconnected"
    SCANNING = "Scanning..."
    CONNECTING = "Connecting..."
    CONNECTED = "Connected"
    DISCONNECTING = "Disconnecting..."


class RebindPolicy(str, Enum):
    """What connect() does while a device is already bound"""
    REBIND = "rebind"
    REQUIRE_DISCONNECT = "require_disconnect"


class StateColors:
    """Color definitions for different states"""
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "red"
    INFO = "blue"
    NEUTRAL = "grey70"
    HIGHLIGHT = "cyan"


class UUIDS:
    """Bluetooth UUIDs for Chemion glasses (Nordic UART service)"""
    UART_SERVICE = "6E400001-B5A3-F393-E0A9-E50E24DCCA9E"
    UART_TX = "6E400002-B5A3-F393-E0A9-E50E24DCCA9E"
    UART_RX = "6E400003-B5A3-F393-E0A9-E50E24DCCA9E"


class PROTOCOL:
    """Vendor UART frame format"""
    HEADER = bytes([0xFA, 0x03, 0x00, 0x39, 0x01, 0x00, 0x06])
    TRAILER = bytes([0x55, 0xA9])
    CHECKSUM_SEED = 0x07
    PACKET_SIZE = 20  # max bytes per characteristic write
    BITS_PER_PIXEL = 2
    PIXELS_PER_BYTE = 4
    MAX_PIXEL_VALUE = 3


class DISPLAY:
    """Physical LED matrix"""
    WIDTH = 24
    HEIGHT = 7


SCAN_WINDOW = 2.0  # seconds
CONNECTION_TIMEOUT = 10.0  # seconds

LOGGER_NAME = "chemion"

STATE_COLORS = {
    ConnectionState.CONNECTED: StateColors.SUCCESS,
    ConnectionState.DISCONNECTED: StateColors.ERROR,
    ConnectionState.CONNECTING: StateColors.WARNING,
    ConnectionState.SCANNING: StateColors.INFO,
    ConnectionState.DISCONNECTING: StateColors.WARNING,
}
