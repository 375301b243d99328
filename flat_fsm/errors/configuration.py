"""
Configuration error classifications for machine construction and loading.

The engine itself reports problems through status codes. These exceptions are
raised only where a caller asks to fail fast, or where a machine definition
cannot be read at all.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union


class FSMError(Exception):
    """Base class for flat_fsm errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MachineConfigurationError(FSMError):
    """A machine failed construction-time validation."""

    def __init__(self, message: str, status: Optional[str] = None,
                 errors: Optional[Sequence[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
        self.errors = list(errors or [])


class ConfigurationLoadError(FSMError):
    """A machine definition file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path
