"""
Simple connection example: scan, connect to the first Chemion glasses, disconnect
"""

import asyncio
from connector import GlassesConnector


async def main():
    glasses = GlassesConnector()
    devices = await glasses.discover()
    chemion = [d for d in devices if "CHEMION" in d.name.upper()]
    if not chemion:
        glasses.console.print("[yellow]No Chemion glasses found[/yellow]")
        return

    async with glasses:
        await glasses.connect(chemion[0].name, chemion[0].address)
        glasses.print_status()

if __name__ == "__main__":
    asyncio.run(main())
