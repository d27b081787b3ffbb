"""Render Boundary — state machine for a nested asynchronous unit of work.

Invariants:
    - A boundary starts Pending and settles exactly once
    - Resolved and Failed are mutually exclusive terminal states
    - Settling an already-settled boundary is rejected (no state rewrite)

Design Decisions:
    - Plain dataclasses + match-case over a class hierarchy (ADR: ExMA no polymorphism)
    - The boundary only holds state; the asyncio task that populates it lives in
      services/products_shell.py, so core stays free of async
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundaryStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class Pending:
    status: BoundaryStatus = BoundaryStatus.PENDING


@dataclass(frozen=True)
class Resolved(Generic[T]):
    payload: T
    status: BoundaryStatus = BoundaryStatus.RESOLVED


@dataclass(frozen=True)
class Failed:
    error: BaseException
    status: BoundaryStatus = BoundaryStatus.FAILED


BoundaryState = Pending | Resolved | Failed


def is_settled(state: BoundaryState) -> bool:
    return not isinstance(state, Pending)


def settle(state: BoundaryState, outcome: BoundaryState) -> BoundaryState:
    """Transition Pending -> outcome. Raises ValueError on any other transition."""
    if is_settled(state):
        raise ValueError(f"Boundary already settled ({state.status.value})")
    if not is_settled(outcome):
        raise ValueError("Cannot settle a boundary back to pending")
    return outcome
