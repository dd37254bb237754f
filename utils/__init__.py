"""Utility functions and constants for Chemion glasses SDK"""

from utils.logger import setup_logger, get_logger, user_guidance
from utils.config import Config
from utils.constants import (
    UUIDS, PROTOCOL, DISPLAY, ConnectionState, RebindPolicy, StateColors
)

__all__ = [
    'setup_logger',
    'get_logger',
    'user_guidance',
    'Config',
    'UUIDS',
    'PROTOCOL',
    'DISPLAY',
    'ConnectionState',
    'RebindPolicy',
    'StateColors'
]
