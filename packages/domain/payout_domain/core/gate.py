"""Access and lifecycle gate.

One administrator identity, injected at construction, and one global pause
switch. Every mutating engine operation passes through here first.
"""

from ..errors import Paused, Unauthorized
from ..schemas import LifecycleState


class AccessGate:
    """Administrator check plus the pause flag stored on the lifecycle state."""

    def __init__(self, administrator: str, lifecycle: LifecycleState):
        if not administrator:
            raise ValueError("administrator identity must be non-empty")
        self.administrator = administrator
        self.lifecycle = lifecycle

    @property
    def paused(self) -> bool:
        return self.lifecycle.paused

    def is_administrator(self, caller: str) -> bool:
        return caller == self.administrator

    def require_administrator(self, caller: str, operation: str) -> None:
        if not self.is_administrator(caller):
            raise Unauthorized(caller, operation)

    def require_open(self, operation: str) -> None:
        if self.lifecycle.paused:
            raise Paused(operation)

    def toggle(self, caller: str) -> bool:
        """Flip the pause flag and return the new value. Administrator only."""
        self.require_administrator(caller, "toggle pause")
        self.lifecycle.paused = not self.lifecycle.paused
        return self.lifecycle.paused
