# This project was developed with assistance from AI tools.
"""Typed rejections raised by the lifecycle engine."""

from typing import Any


class TransitionRejected(ValueError):
    """Base class for a status change the engine refuses to make."""

    code = "transition_rejected"

    def __init__(self, message: str, *, current: Any = None, target: Any = None, role: Any = None):
        super().__init__(message)
        self.current = current
        self.target = target
        self.role = role


class DegenerateInput(TransitionRejected):
    """Unknown status or role, or a target equal to the current status."""

    code = "degenerate_input"


class InvalidTransition(TransitionRejected):
    """No edge from the current status to the target for any role."""

    code = "invalid_transition"


class Forbidden(TransitionRejected):
    """The edge exists but the acting role may not take it."""

    code = "forbidden"
