"""
State machine data models.

This module defines the immutable records a machine is built from: the
configuration tree (states, events, actions) and the closed set of status
codes reported by construction and by event handling.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Optional

Callback = Callable[[], Any]


class StatusCode(str, Enum):
    """Outcome of machine construction or of a handled event."""
    OK = "OK"
    ERROR_ILLEGAL_EVENT = "ERROR_ILLEGAL_EVENT"
    ERROR_INVALID_START_STATE = "ERROR_INVALID_START_STATE"
    ERROR_NO_VALID_STATES = "ERROR_NO_VALID_STATES"
    ERROR_INVALID_EVENT_NODE = "ERROR_INVALID_EVENT_NODE"
    ERROR_INVALID_TARGET_STATE = "ERROR_INVALID_TARGET_STATE"
    ERROR_INVALID_TRANSISTION_FUNCTION = "ERROR_INVALID_TRANSISTION_FUNCTION"
    ERROR_INVALID_ACTION_FUNCTION = "ERROR_INVALID_ACTION_FUNCTION"
    ERROR_IMPROPERLY_INITIALIZED = "ERROR_IMPROPERLY_INITIALIZED"


def _copy_value(value: Any) -> Any:
    """Deep-copy plain data, share callables by reference."""
    if value is None or callable(value):
        return value
    return copy.deepcopy(value)


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class EventDef:
    """A transition out of a state, triggered by a named event.

    Callback fields hold whatever the configuration supplied; construction
    validation is what guarantees they are callable.
    """

    to_state: Any
    on_before: Optional[Callback] = None
    on_after: Optional[Callback] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "EventDef":
        return cls(
            to_state=_copy_value(data.get("to_state")),
            on_before=_copy_value(data.get("on_before")),
            on_after=_copy_value(data.get("on_after")),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"to_state": self.to_state}
        if self.on_before is not None:
            result["on_before"] = self.on_before
        if self.on_after is not None:
            result["on_after"] = self.on_after
        return result


@dataclass(frozen=True)
class StateActions:
    """Callbacks fired whenever a state is entered or exited."""

    on_enter: Optional[Callback] = None
    on_exit: Optional[Callback] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "StateActions":
        return cls(
            on_enter=_copy_value(data.get("on_enter")),
            on_exit=_copy_value(data.get("on_exit")),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.on_enter is not None:
            result["on_enter"] = self.on_enter
        if self.on_exit is not None:
            result["on_exit"] = self.on_exit
        return result


@dataclass(frozen=True)
class StateDef:
    """A named mode of the machine with its outgoing events.

    An entry of ``None`` in ``events`` marks a malformed event node.
    """

    events: Mapping[str, Optional[EventDef]] = field(default_factory=lambda: MappingProxyType({}))
    actions: Optional[StateActions] = None

    @property
    def is_terminal(self) -> bool:
        return not self.events

    @classmethod
    def from_dict(cls, data: Any) -> "StateDef":
        if not isinstance(data, Mapping):
            return cls()

        events = {}
        raw_events = data.get("events")
        if isinstance(raw_events, Mapping):
            for event_name, event in raw_events.items():
                events[event_name] = EventDef.from_dict(event) if isinstance(event, Mapping) else None

        raw_actions = data.get("actions")
        actions = StateActions.from_dict(raw_actions) if isinstance(raw_actions, Mapping) else None

        return cls(events=_frozen(events), actions=actions)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "events": {
                name: event.to_dict() if event is not None else None
                for name, event in self.events.items()
            }
        }
        if self.actions is not None:
            result["actions"] = self.actions.to_dict()
        return result


@dataclass(frozen=True)
class MachineConfig:
    """Complete machine configuration: a start state and the declared states."""

    start_state: Any
    states: Mapping[str, StateDef] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: Any) -> "MachineConfig":
        """
        Build an immutable configuration from a plain mapping.

        Normalization is lenient: malformed nodes are dropped or replaced by
        empty records so that a machine can still be built and queried.
        Reporting those problems is the validator's job.
        """
        if not isinstance(data, Mapping):
            return cls(start_state=None)

        states = {}
        raw_states = data.get("states")
        if isinstance(raw_states, Mapping):
            for state_name, state in raw_states.items():
                states[state_name] = StateDef.from_dict(state)

        return cls(
            start_state=_copy_value(data.get("start_state")),
            states=_frozen(states),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_state": self.start_state,
            "states": {name: state.to_dict() for name, state in self.states.items()},
        }
