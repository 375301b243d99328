"""
Error classification for the flat_fsm engine.

This module provides the exception hierarchy used by the fail-fast helpers
and the machine definition loader.
"""

from .configuration import (
    ConfigurationLoadError,
    FSMError,
    MachineConfigurationError,
)

__all__ = [
    "FSMError",
    "MachineConfigurationError",
    "ConfigurationLoadError",
]
