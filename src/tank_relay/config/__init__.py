"""
Configuration management for the Tank Relay server.

This package provides environment-backed configuration with
validation and default value management.
"""

from .settings import RelayConfig, RelayConfigManager, config_manager

__all__ = [
    "RelayConfig",
    "RelayConfigManager",
    "config_manager",
]
