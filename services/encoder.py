"""
Frame encoder for Chemion glasses

Command layout:

    header (7)  fa 03 00 39 01 00 06
    payload     4 pixels per byte, 2 bits each, MSB first, row-major
    checksum    0x07 ^ payload[0] ^ ... ^ payload[n-1]
    trailer (2) 55 a9

The command is then cut into 20-byte packets, the largest single write the
glasses' UART characteristic accepts.
"""
from typing import List

from services.frame import EncodedFrame, PixelFrame
from utils.constants import PROTOCOL
from utils.exceptions import InvalidPixelValueError


def _is_pixel(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= PROTOCOL.MAX_PIXEL_VALUE
    )


def pack_pixels(frame: PixelFrame) -> bytes:
    """
    Pack pixels into payload bytes.

    Trailing pixels that don't fill a whole byte are dropped, the same way
    the vendor tool does it; they are still validated.

    Raises:
        InvalidPixelValueError: on the first pixel outside 0-3
    """
    payload = bytearray()
    acc = 0
    count = 0
    for y, x, value in frame.pixels():
        if not _is_pixel(value):
            raise InvalidPixelValueError(y, x, value)
        acc = (acc << PROTOCOL.BITS_PER_PIXEL) | value
        count += 1
        if count == PROTOCOL.PIXELS_PER_BYTE:
            payload.append(acc)
            acc = 0
            count = 0
    return bytes(payload)


def checksum(payload: bytes) -> int:
    """Running XOR over the payload, seeded with 0x07"""
    value = PROTOCOL.CHECKSUM_SEED
    for byte in payload:
        value ^= byte
    return value


def build_command(frame: PixelFrame) -> bytes:
    """Full UART command for a frame, before packetizing"""
    payload = pack_pixels(frame)
    return PROTOCOL.HEADER + payload + bytes([checksum(payload)]) + PROTOCOL.TRAILER


def packetize(data: bytes, size: int = PROTOCOL.PACKET_SIZE) -> List[bytes]:
    """Split data into consecutive chunks of at most `size` bytes"""
    if size <= 0:
        raise ValueError("Packet size must be positive")
    return [data[i:i + size] for i in range(0, len(data), size)]


def encode(frame: PixelFrame) -> EncodedFrame:
    """
    Encode a pixel frame into transport packets.

    All or nothing: an invalid pixel raises before any packet exists.

    Raises:
        InvalidPixelValueError: if any pixel is outside 0-3
    """
    return EncodedFrame(packetize(build_command(frame)))
