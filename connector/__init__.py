"""Chemion glasses connector package"""

from connector.base import GlassesConnector
from connector.bluetooth import BleakAdapterManager
from services.transport import Adapter, AdapterManager, Peripheral

__all__ = [
    'GlassesConnector',
    'BleakAdapterManager',
    'Adapter',
    'AdapterManager',
    'Peripheral'
]
