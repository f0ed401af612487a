"""
Configuration management for the Bitstamp client.
"""
from .settings import (
    AppConfig,
    BitstampConfig,
    Credentials,
    get_config,
)

__all__ = [
    "AppConfig",
    "BitstampConfig",
    "Credentials",
    "get_config",
]
