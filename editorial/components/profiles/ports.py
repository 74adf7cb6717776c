"""Profile port definitions."""

from editorial.ports.clock import ClockPort
from editorial.ports.repo import ProfileRepoPort, UnitOfWorkPort

__all__ = ["ClockPort", "ProfileRepoPort", "UnitOfWorkPort"]
