"""
Frame models for Chemion glasses

A PixelFrame is what the user draws (2-bit intensities), an EncodedFrame is
what goes over the air (UART command split into transport packets).
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from utils.constants import DISPLAY, PROTOCOL
from utils.exceptions import EncodingError, InvalidPacketError

FRAME_KEY = "glasses_frame"


@dataclass(frozen=True)
class PixelFrame:
    """
    Grid of pixel intensities (0 = off .. 3 = brightest)

    Rows are expected to be the same length but this is not enforced:
    ragged rows are encoded as one flat row-major pixel stream, which is
    what the glasses' own tool accepts. `width` is the length of row 0.
    """
    rows: Tuple[Tuple[int, ...], ...]

    def __init__(self, rows: Iterable[Iterable[int]]):
        try:
            rows = tuple(tuple(row) for row in rows)
        except TypeError:
            raise EncodingError("Frame must be a sequence of pixel rows")
        object.__setattr__(self, "rows", rows)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def pixels(self) -> Iterable[Tuple[int, int, Any]]:
        """Yield (row, column, value) in row-major order"""
        for y, row in enumerate(self.rows):
            for x, value in enumerate(row):
                yield y, x, value

    @classmethod
    def blank(cls, width: int = DISPLAY.WIDTH, height: int = DISPLAY.HEIGHT) -> 'PixelFrame':
        """All pixels off"""
        return cls([[0] * width for _ in range(height)])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PixelFrame':
        """Build from {"glasses_frame": [[...], ...]}"""
        try:
            rows = data[FRAME_KEY]
        except (KeyError, TypeError):
            raise EncodingError(f"Frame body must contain '{FRAME_KEY}'")
        return cls(rows)

    @classmethod
    def from_text(cls, text: str) -> 'PixelFrame':
        """
        Build from a text grid, one row per line, one digit per pixel.

        Blank lines are skipped, so is whitespace inside a row. Characters
        that are not digits are kept as-is and rejected by the encoder.
        """
        rows = []
        for line in text.splitlines():
            cells = "".join(line.split())
            if not cells:
                continue
            rows.append([int(c) if c.isdigit() else c for c in cells])
        return cls(rows)

    def to_dict(self) -> Dict[str, Any]:
        return {FRAME_KEY: [list(row) for row in self.rows]}


@dataclass(frozen=True)
class EncodedFrame:
    """UART command split into transport packets, in send order"""
    packets: Tuple[bytes, ...]

    def __init__(self, packets: Iterable[bytes]):
        object.__setattr__(self, "packets", tuple(bytes(p) for p in packets))

    def __iter__(self):
        return iter(self.packets)

    def __len__(self) -> int:
        return len(self.packets)

    def to_bytes(self) -> bytes:
        """Full command as one byte string"""
        return b"".join(self.packets)

    def hex(self) -> List[str]:
        return [p.hex() for p in self.packets]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EncodedFrame':
        """Build from {"glasses_frame": [[byte, ...], ...]}"""
        try:
            raw = data[FRAME_KEY]
        except (KeyError, TypeError):
            raise InvalidPacketError(f"Frame body must contain '{FRAME_KEY}'")
        return cls(validate_packets(raw))

    def to_dict(self) -> Dict[str, Any]:
        return {FRAME_KEY: [list(p) for p in self.packets]}


def validate_packets(raw: Iterable[Sequence[int]]) -> List[bytes]:
    """Check every packet is 1-20 bytes of 0-255 values"""
    packets = []
    for index, packet in enumerate(raw):
        try:
            if isinstance(packet, (int, str)):
                raise TypeError(packet)
            data = bytes(packet)
        except (TypeError, ValueError):
            raise InvalidPacketError(f"Wrong value in encoded frame: packet {index} is not a byte sequence")
        if not data or len(data) > PROTOCOL.PACKET_SIZE:
            raise InvalidPacketError(
                f"Wrong value in encoded frame: packet {index} has {len(data)} bytes "
                f"(expected 1-{PROTOCOL.PACKET_SIZE})"
            )
        packets.append(data)
    return packets


@dataclass(frozen=True)
class DeviceDescriptor:
    """A named BLE peripheral seen during discovery"""
    address: str
    name: str

    def __str__(self):
        return f"{self.name} ({self.address})"

    def to_dict(self) -> Dict[str, str]:
        return {"device_address": self.address, "device_name": self.name}
