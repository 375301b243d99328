"""Integration tests for machines loaded from YAML definitions."""

import pytest

from flat_fsm import StatusCode
from flat_fsm.config.loader import ConfigLoader


@pytest.fixture
def login_callbacks(recorder):
    """Callback registry for the bundled login definition."""
    return {
        "announce_logged_out": recorder("You have been logged out."),
        "announce_logged_in": recorder("You are now logged in."),
        "report_login_failure": recorder("Login FAILED."),
        "say_goodbye": recorder("Thanks for playing!"),
    }


class TestLoginIntegration:
    """Test the bundled login definition end to end."""

    def test_login_sequence(self, login_callbacks, call_log):
        """Test the login sequence fires its callbacks in order."""
        loader = ConfigLoader.create(callbacks=login_callbacks)
        machine = loader.build_machine("login").require_valid()
        visited = []

        for event in ["login", "failure", "login", "success", "logout"]:
            assert machine.handle_event(event) == StatusCode.OK
            visited.append(machine.current_state())

        assert visited == ["LoggingIn", "LoggedOut", "LoggingIn", "LoggedIn", "LoggedOut"]
        assert call_log == [
            "Login FAILED.",
            "You have been logged out.",
            "You are now logged in.",
            "You have been logged out.",
            "Thanks for playing!",
        ]

    def test_login_without_callbacks_is_invalid(self):
        """Test the definition needs its callback registry."""
        machine = ConfigLoader.create().build_machine("login")

        assert machine.is_valid() is False
        assert machine.current_state() == "LoggedOut"
        assert machine.handle_event("login") == StatusCode.ERROR_IMPROPERLY_INITIALIZED


class TestLightSwitchIntegration:
    """Test the bundled light switch definition."""

    def test_toggle(self):
        """Test toggling a machine loaded from YAML."""
        machine = ConfigLoader.create().build_machine("light_switch")

        assert machine.is_valid() is True
        assert machine.handle_event("turnOn") == StatusCode.OK
        assert machine.current_state() == "On"
        assert machine.handle_event("turnOff") == StatusCode.OK
        assert machine.handle_event("turnOff") == StatusCode.ERROR_ILLEGAL_EVENT
        assert machine.current_state() == "Off"

    def test_machines_are_independent(self):
        """Test two machines built from one definition keep separate state."""
        loader = ConfigLoader.create()
        first = loader.build_machine("light_switch")
        second = loader.build_machine("light_switch")

        first.handle_event("turnOn")

        assert first.current_state() == "On"
        assert second.current_state() == "Off"
