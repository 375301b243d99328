"""Machine definition loader for YAML files with a named-callback registry."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationLoadError
from ..logging.config import get_logger
from ..state.machine import Machine
from ..state.models import Callback

logger = get_logger(__name__)

ACTION_KEYS = ("on_enter", "on_exit")
TRANSITION_KEYS = ("on_before", "on_after")


@dataclass(frozen=True)
class ConfigLoader:
    """Loads machine definitions and resolves callback names to callables.

    YAML cannot carry functions, so definitions name their callbacks and the
    loader swaps each name for the registered callable. Names missing from the
    registry are left as strings; machine construction then reports them as
    non-callable callbacks.
    """

    config_dir: Path
    callbacks: Mapping[str, Callback] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        callbacks: Optional[Mapping[str, Callback]] = None
    ) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "machines"

        return cls(
            config_dir=Path(config_dir),
            callbacks=dict(callbacks or {}),
        )

    def load_file(self, path: Union[str, Path]) -> dict[str, Any]:
        """Read a machine definition from a YAML file and resolve its callbacks."""
        path = Path(path)

        if not path.exists():
            raise ConfigurationLoadError(f"Machine definition not found: {path}", path=path)

        try:
            with open(path) as f:
                definition = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationLoadError(
                f"Machine definition is not valid YAML: {path}",
                path=path,
                context={"reason": str(e)}
            ) from e

        if not isinstance(definition, dict):
            raise ConfigurationLoadError(
                f"Machine definition must be a mapping: {path}",
                path=path,
                context={"type": type(definition).__name__}
            )

        return self.resolve_callbacks(definition)

    def load_definition(self, name: str) -> dict[str, Any]:
        """Load ``<config_dir>/<name>.yaml``."""
        return self.load_file(self.config_dir / f"{name}.yaml")

    def build_machine(self, name: str, logger: Optional[Any] = None) -> Machine:
        """Load a named definition and construct a machine from it."""
        return Machine(self.load_definition(name), logger=logger, name=name)

    def resolve_callbacks(self, definition: dict[str, Any]) -> dict[str, Any]:
        """Replace callback names in a definition with registered callables."""
        states = definition.get("states")
        if not isinstance(states, dict):
            return definition

        for state_name, state in states.items():
            if not isinstance(state, dict):
                continue

            actions = state.get("actions")
            if isinstance(actions, dict):
                self._resolve_keys(actions, ACTION_KEYS, f"states.{state_name}.actions")

            events = state.get("events")
            if isinstance(events, dict):
                for event_name, event in events.items():
                    if isinstance(event, dict):
                        self._resolve_keys(event, TRANSITION_KEYS,
                                           f"states.{state_name}.events.{event_name}")

        return definition

    def _resolve_keys(self, node: dict[str, Any], keys: tuple[str, ...], path: str) -> None:
        for key in keys:
            value = node.get(key)
            if not isinstance(value, str):
                continue
            if value in self.callbacks:
                node[key] = self.callbacks[value]
            else:
                logger.warning(
                    "Callback name is not registered",
                    field=f"{path}.{key}",
                    callback=value
                )
