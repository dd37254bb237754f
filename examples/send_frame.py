"""
Example of sending a frame to Chemion glasses

The glasses show a 24x7 matrix, each LED with four levels (0 = off, 3 = full).
A frame is sent as one UART command:

    fa 03 00 39 01 00 06     header
    <42 bytes>               4 pixels per byte, 2 bits each, MSB first
    <checksum>               0x07 XOR every payload byte
    55 a9                    trailer

split into 20-byte writes to characteristic 6E400002-B5A3-F393-E0A9-E50E24DCCA9E.
"""

import asyncio
import sys
from connector import GlassesConnector
from services import PixelFrame

HEART = """
000000000000000000000000
000001100011000000000000
000012210122100000000000
000012333332100000000000
000001233321000000000000
000000123210000000000000
000000012100000000000000
"""


async def main(address: str):
    frame = PixelFrame.from_text(HEART)

    async with GlassesConnector() as glasses:
        await glasses.connect("Chemion", address)
        encoded = await glasses.show(frame)
        for packet in encoded.hex():
            glasses.console.print(packet)

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python examples/send_frame.py <address>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))
