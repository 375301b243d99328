"""
Core finite-state machine engine.

A Machine is validated once, when it is built, and then mediates transitions
between its declared states in response to named events. Construction never
raises: problems are recorded as a status code and every transition-handling
call on an invalid machine is refused.

A Machine is not safe for simultaneous use from several threads; callers that
share one must serialize access to it.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from ..config.validation import ConfigValidator, ValidationError, ValidationResult
from ..errors import MachineConfigurationError
from ..logging.config import get_state_logger, log_state_transition
from .models import Callback, MachineConfig, StatusCode

state_logger = get_state_logger(__name__)


class Machine:
    """Single-current-state machine with flat states.

    Transitions fire their callbacks in a fixed order::

        on_before -> on_exit(old) -> current := new -> on_enter(new) -> on_after

    ``current_state()`` reports the new state from the mutation on, so
    ``on_enter`` and ``on_after`` observe the target state while ``on_before``
    and ``on_exit`` still observe the source state. A transition whose target
    is the current state is not a no-op: all four callbacks still fire.

    Exceptions raised by callbacks propagate to the caller of
    ``handle_event``. Callbacks later in the order do not run and the current
    state is left wherever the transition had got to.
    """

    def __init__(
        self,
        config: Union[Mapping, MachineConfig, None],
        logger: Optional[Any] = None,
        name: Optional[str] = None
    ):
        self.name = name
        self.logger = logger if logger is not None else state_logger
        if name is not None:
            self.logger = self.logger.bind(machine=name)

        raw = config.to_dict() if isinstance(config, MachineConfig) else config
        validation = ConfigValidator.validate_machine(raw)

        self._config = MachineConfig.from_dict(raw)
        self._validation = validation
        self._current: Optional[str] = validation.start_state
        self._init_status = validation.status
        self._is_internal_valid = validation.is_valid

        self._report_validation(validation)

    def _report_validation(self, validation: ValidationResult) -> None:
        for warning in validation.warnings:
            self.logger.warning(warning.message, field=warning.field)

        for error in validation.errors:
            self.logger.error(
                error.message,
                field=error.field,
                value=repr(error.value),
                status=error.status.value
            )

        if not validation.is_valid:
            self.logger.error(
                "Machine configuration is invalid",
                status=validation.status.value,
                error_count=len(validation.errors)
            )

    def is_valid(self) -> bool:
        return self._init_status == StatusCode.OK

    def status(self) -> StatusCode:
        return self._init_status

    def current_state(self) -> Optional[str]:
        return self._current

    @property
    def validation_errors(self) -> tuple[ValidationError, ...]:
        """Every problem found at construction, in evaluation order."""
        return tuple(self._validation.errors)

    @property
    def validation_warnings(self) -> tuple[ValidationError, ...]:
        return tuple(self._validation.warnings)

    def require_valid(self) -> "Machine":
        """Return this machine, or raise if it failed validation."""
        if not self.is_valid():
            raise MachineConfigurationError(
                f"Machine configuration is invalid ({self._init_status.value})",
                status=self._init_status,
                errors=self._validation.errors,
                context={"machine": self.name}
            )
        return self

    def _log_inoperable(self) -> None:
        self.logger.error(
            "Machine was not initialized properly and is inoperable",
            status=StatusCode.ERROR_IMPROPERLY_INITIALIZED.value,
            init_status=self._init_status.value
        )

    def can_handle_event(self, name: str) -> bool:
        """Check if the event is registered for the current state."""
        if not self._is_internal_valid:
            self._log_inoperable()
            return False
        return name in self._config.states[self._current].events

    def handle_event(self, name: str) -> StatusCode:
        """
        Attempt the transition registered for ``name`` on the current state.

        Returns:
            OK on success, ERROR_IMPROPERLY_INITIALIZED if the machine failed
            validation, ERROR_ILLEGAL_EVENT if the current state does not know
            the event, or ERROR_INVALID_TARGET_STATE if the event points to an
            unknown state. The current state is unchanged on any error.
        """
        if not self._is_internal_valid:
            self._log_inoperable()
            return StatusCode.ERROR_IMPROPERLY_INITIALIZED

        if not self.can_handle_event(name):
            self.logger.error(
                "Event is unknown to current state, no state change occurred",
                event_name=name,
                current_state=self._current
            )
            return StatusCode.ERROR_ILLEGAL_EVENT

        states = self._config.states
        source = self._current
        event_def = states[source].events[name]
        target = event_def.to_state

        if not isinstance(target, str) or target not in states:
            self.logger.error(
                "Current state cannot handle event, invalid target state",
                event_name=name,
                current_state=source,
                to_state=repr(target)
            )
            return StatusCode.ERROR_INVALID_TARGET_STATE

        self._fire(event_def.on_before)
        self._fire(self._action(source, "on_exit"))

        self._current = target
        log_state_transition(
            self.logger,
            machine=self.name,
            from_state=source,
            to_state=target,
            trigger=name
        )

        self._fire(self._action(target, "on_enter"))
        self._fire(event_def.on_after)
        return StatusCode.OK

    def _action(self, state_name: str, action_name: str) -> Optional[Callback]:
        actions = self._config.states[state_name].actions
        if actions is None:
            return None
        return getattr(actions, action_name)

    @staticmethod
    def _fire(callback: Optional[Callback]) -> None:
        if callable(callback):
            callback()

    def __repr__(self) -> str:
        return (f"Machine(name={self.name!r}, current={self._current!r}, "
                f"status={self._init_status.value})")


def new_machine(
    config: Union[Mapping, MachineConfig, None],
    logger: Optional[Any] = None,
    name: Optional[str] = None
) -> Machine:
    """Create a new machine from a configuration mapping or MachineConfig."""
    return Machine(config, logger=logger, name=name)
