"""Machine configuration validation utilities."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ..state.models import StatusCode


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation problem."""
    field: str
    message: str
    value: Any
    status: StatusCode = StatusCode.OK


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a complete machine configuration."""
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)
    start_state: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def status(self) -> StatusCode:
        """Status of the last problem detected, or OK."""
        if not self.errors:
            return StatusCode.OK
        return self.errors[-1].status


def _is_present(value: Any) -> bool:
    return value is not None


class ConfigValidator:
    """Validates machine configurations.

    Every check runs and every problem is collected, in evaluation order.
    """

    @staticmethod
    def validate_start_state(config: Mapping, states: Mapping) -> list[ValidationError]:
        """Validate that the start state names a declared state."""
        errors = []

        value = config.get("start_state")
        if not isinstance(value, str) or value not in states:
            if isinstance(value, str) and value:
                message = f'Start state "{value}" is not a valid state name'
            else:
                message = "Could not determine a valid start state"
            errors.append(ValidationError(
                field="start_state",
                message=message,
                value=value,
                status=StatusCode.ERROR_INVALID_START_STATE
            ))

        return errors

    @staticmethod
    def validate_actions(state_name: str, actions: Any) -> list[ValidationError]:
        """Validate the on_enter/on_exit actions of one state."""
        errors = []

        if actions is None:
            return errors

        if not isinstance(actions, Mapping):
            errors.append(ValidationError(
                field=f"states.{state_name}.actions",
                message=f'State "{state_name}" has an invalid "actions" node, it should be a mapping',
                value=actions,
                status=StatusCode.ERROR_INVALID_ACTION_FUNCTION
            ))
            return errors

        for action_name in ("on_enter", "on_exit"):
            value = actions.get(action_name)
            if _is_present(value) and not callable(value):
                errors.append(ValidationError(
                    field=f"states.{state_name}.actions.{action_name}",
                    message=f'State "{state_name}" has an invalid "{action_name}" action, it should be a function',
                    value=value,
                    status=StatusCode.ERROR_INVALID_ACTION_FUNCTION
                ))

        return errors

    @staticmethod
    def validate_event(state_name: str, event_name: str, event: Any,
                       states: Mapping) -> list[ValidationError]:
        """Validate a single event node of one state."""
        errors = []
        prefix = f"states.{state_name}.events.{event_name}"

        if not isinstance(event, Mapping):
            errors.append(ValidationError(
                field=prefix,
                message=f'State "{state_name}" has an invalid "event" node for "{event_name}"',
                value=event,
                status=StatusCode.ERROR_INVALID_EVENT_NODE
            ))
            return errors

        for callback_name in ("on_before", "on_after"):
            value = event.get(callback_name)
            if _is_present(value) and not callable(value):
                errors.append(ValidationError(
                    field=f"{prefix}.{callback_name}",
                    message=(f'Event "{event_name}" for state "{state_name}" has an invalid '
                             f'"{callback_name}", it should be a function'),
                    value=value,
                    status=StatusCode.ERROR_INVALID_TRANSISTION_FUNCTION
                ))

        to_state = event.get("to_state")
        if not isinstance(to_state, str) or to_state not in states:
            if isinstance(to_state, str) and to_state:
                message = (f'Event "{event_name}" for state "{state_name}" has an unknown '
                           f'target state of "{to_state}"')
            else:
                message = f'Event "{event_name}" for state "{state_name}" has no valid target state specified'
            errors.append(ValidationError(
                field=f"{prefix}.to_state",
                message=message,
                value=to_state,
                status=StatusCode.ERROR_INVALID_TARGET_STATE
            ))

        return errors

    @staticmethod
    def validate_state(state_name: str, state: Any,
                       states: Mapping) -> tuple[list[ValidationError], list[ValidationError]]:
        """Validate one declared state, returning (errors, warnings)."""
        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []

        if not isinstance(state, Mapping):
            state = {}

        events = state.get("events")
        if not isinstance(events, Mapping) or not events:
            warnings.append(ValidationError(
                field=f"states.{state_name}.events",
                message=(f'State "{state_name}" has no configured events, '
                         'upon entry you will never be able to leave'),
                value=events
            ))
            events = {}

        errors.extend(ConfigValidator.validate_actions(state_name, state.get("actions")))

        for event_name, event in events.items():
            errors.extend(ConfigValidator.validate_event(state_name, event_name, event, states))

        return errors, warnings

    @staticmethod
    def validate_machine(config: Any) -> ValidationResult:
        """Validate complete machine configuration."""
        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []

        states = config.get("states") if isinstance(config, Mapping) else None
        if not isinstance(states, Mapping):
            errors.append(ValidationError(
                field="states",
                message="Configuration has no valid states specified",
                value=states,
                status=StatusCode.ERROR_NO_VALID_STATES
            ))
            return ValidationResult(errors=errors, warnings=warnings)

        start_errors = ConfigValidator.validate_start_state(config, states)
        errors.extend(start_errors)
        start_state = None if start_errors else config["start_state"]

        if not states:
            errors.append(ValidationError(
                field="states",
                message="Configuration has no valid states specified",
                value=states,
                status=StatusCode.ERROR_NO_VALID_STATES
            ))

        for state_name, state in states.items():
            state_errors, state_warnings = ConfigValidator.validate_state(state_name, state, states)
            errors.extend(state_errors)
            warnings.extend(state_warnings)

        return ValidationResult(errors=errors, warnings=warnings, start_state=start_state)
