"""
flat_fsm - Configurable Finite-State Machine Engine

A small engine for single-current-state machines with flat states. A machine
is built from a declarative description of states, events and lifecycle
callbacks, validated once at construction, and then driven by named events.
"""

from .state.machine import Machine, new_machine
from .state.models import (
    EventDef,
    MachineConfig,
    StateActions,
    StateDef,
    StatusCode,
)

__version__ = "0.1.0"
__author__ = "flat_fsm Team"

__all__ = [
    "EventDef",
    "Machine",
    "MachineConfig",
    "StateActions",
    "StateDef",
    "StatusCode",
    "new_machine",
]
