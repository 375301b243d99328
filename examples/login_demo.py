#!/usr/bin/env python3
"""
Login Demo - flat_fsm

Models a login sequence with the engine and walks it through a failed login,
a successful one and a logout, printing the state before each event.

Run: python examples/login_demo.py
"""

from flat_fsm import StatusCode, new_machine
from flat_fsm.config.loader import ConfigLoader
from flat_fsm.logging import configure_logging


CALLBACKS = {
    "announce_logged_out": lambda: print("You have been logged out."),
    "announce_logged_in": lambda: print("You are now logged in."),
    "report_login_failure": lambda: print("Login FAILED."),
    "say_goodbye": lambda: print("Thanks for playing!"),
}


def run_sequence(machine, events):
    """Drive a machine through events, stopping at the first refusal."""
    for event in events:
        print(f"I am {machine.current_state()}, calling {event!r} ...")
        status = machine.handle_event(event)
        if status != StatusCode.OK:
            print(f"  refused: {status.value}")
            return False
    return True


def main():
    configure_logging(level="WARNING")

    print("🔐 LOGIN SEQUENCE (from machines/login.yaml)")
    print("=" * 50)
    loader = ConfigLoader.create(callbacks=CALLBACKS)
    machine = loader.build_machine("login").require_valid()
    run_sequence(machine, ["login", "failure", "login", "success", "logout"])
    print(f"Finished in {machine.current_state()}")

    print("\n💡 LIGHT SWITCH (inline configuration)")
    print("=" * 50)
    switch = new_machine({
        "start_state": "Off",
        "states": {
            "Off": {"events": {"turnOn": {"to_state": "On"}}},
            "On": {"events": {"turnOff": {"to_state": "Off"}}},
        },
    })
    run_sequence(switch, ["turnOn", "turnOff", "turnOff"])
    print(f"Finished in {switch.current_state()}")


if __name__ == "__main__":
    main()
