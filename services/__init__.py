"""
Chemion services module - frame encoding, session and display
"""

from .frame import PixelFrame, EncodedFrame, DeviceDescriptor
from .encoder import encode
from .transport import Adapter, AdapterManager, Peripheral
from .session import DeviceSession, Connected, Disconnected
from .display import DisplayDispatcher

__all__ = [
    'PixelFrame',
    'EncodedFrame',
    'DeviceDescriptor',
    'encode',
    'Adapter',
    'AdapterManager',
    'Peripheral',
    'DeviceSession',
    'Connected',
    'Disconnected',
    'DisplayDispatcher'
]
