"""
Configuration management for Chemion glasses
"""
import os
import json
from dataclasses import dataclass, asdict, fields
from typing import Optional

from utils.constants import CONNECTION_TIMEOUT, DISPLAY, SCAN_WINDOW, RebindPolicy


@dataclass
class Config:
    """Configuration for Chemion glasses SDK"""
    # Get the SDK root directory
    SDK_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    CONFIG_FILE = os.path.join(SDK_ROOT, "chemion_config.json")

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = os.path.join(SDK_ROOT, "chemion.log")
    console_log: bool = True
    reset_logs: bool = True

    # Connection configuration
    adapter: Optional[str] = None  # e.g. "hci0", None for the first available
    scan_window: float = SCAN_WINDOW
    connection_timeout: float = CONNECTION_TIMEOUT
    rebind_policy: str = RebindPolicy.REBIND.value

    # Last connected device
    last_address: Optional[str] = None
    last_name: Optional[str] = None

    # Display settings
    display_width: int = DISPLAY.WIDTH
    display_height: int = DISPLAY.HEIGHT

    def __post_init__(self):
        # Raises ValueError on unknown policies
        self.rebind_policy = RebindPolicy(self.rebind_policy).value

    def save(self, path: Optional[str] = None):
        """Save configuration to file with comments"""
        path = path or self.CONFIG_FILE
        config_data = asdict(self)

        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

        comments = {
            "log_level": "Logging level (DEBUG/INFO/ERROR)",
            "log_file": "Log file path (null disables file logging)",
            "reset_logs": "Reset logs on startup",
            "console_log": "Enable console logging",
            "adapter": "Bluetooth adapter name, null for the first available",
            "scan_window": "Seconds to scan before listing devices",
            "connection_timeout": "Seconds to wait for a connection",
            "rebind_policy": "rebind or require_disconnect when connecting while connected",
            "last_address": "Last connected glasses address (clear to forget)",
            "last_name": "Last connected glasses name",
            "display_width": "Display width in pixels, the size of the frame 'chemion clear' sends",
            "display_height": "Display height in pixels",
        }

        commented_config = {
            "_comment": "Chemion Glasses SDK Configuration",
            "_instructions": "Clear last_address to stop 'chemion show' from reusing the last device",
            "config": config_data,
        }

        for key, comment in comments.items():
            commented_config[f"_{key}_comment"] = comment

        with open(path, 'w') as f:
            json.dump(commented_config, f, indent=2, sort_keys=False)

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'Config':
        """Load configuration from file or create default"""
        path = path or cls.CONFIG_FILE
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            config = cls()
            config.save(path)
            return config

        known = {f.name for f in fields(cls)}
        config_data = {k: v for k, v in data.get("config", {}).items() if k in known}
        return cls(**config_data)
