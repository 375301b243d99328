"""
State machine engine module.

Holds the configuration records and the Machine engine that validates a
configuration once and then mediates event-driven transitions between states.
"""
