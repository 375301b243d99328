"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Dict, List


@pytest.fixture
def light_switch_config() -> Dict[str, Any]:
    """Two-state light switch."""
    return {
        "start_state": "Off",
        "states": {
            "Off": {"events": {"turnOn": {"to_state": "On"}}},
            "On": {"events": {"turnOff": {"to_state": "Off"}}},
        },
    }


@pytest.fixture
def login_config() -> Dict[str, Any]:
    """Login sequence without callbacks."""
    return {
        "start_state": "LoggedOut",
        "states": {
            "LoggedOut": {
                "events": {"login": {"to_state": "LoggingIn"}},
            },
            "LoggingIn": {
                "events": {
                    "success": {"to_state": "LoggedIn"},
                    "failure": {"to_state": "LoggedOut"},
                },
            },
            "LoggedIn": {
                "events": {"logout": {"to_state": "LoggedOut"}},
            },
        },
    }


@pytest.fixture
def call_log() -> List[str]:
    """Ordered record of callback invocations."""
    return []


@pytest.fixture
def recorder(call_log):
    """Build zero-argument callbacks that append a label to call_log."""
    def make(label: str):
        def callback():
            call_log.append(label)
        return callback
    return make
