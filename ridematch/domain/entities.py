"""
Domain entities with business logic.

Patterns used
-------------
- **Tagged variant** on ``Account``: drivers and riders share one shape
  and are told apart by ``role`` rather than by subclassing.
- **State Pattern** on ``RideRequest``: enforces valid lifecycle
  transitions (PENDING -> ACCEPTED | REJECTED).
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import REQUEST_TRANSITIONS, RequestState, Role


class InvalidStateTransition(Exception):
    """Raised when a ride request state change violates the state machine."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Offer:
    driver_username: str
    destination: str


@dataclass(frozen=True)
class ConfirmedRide:
    driver_username: str
    destination: str


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Account:
    role: Role
    username: str
    password_hash: str


@dataclass
class RideRequest:
    rider_username: str
    driver_username: str
    destination: str
    state: RequestState = RequestState.PENDING

    @property
    def is_pending(self) -> bool:
        return self.state is RequestState.PENDING

    def transition_to(self, new_state: RequestState) -> None:
        """Move to *new_state* if the transition is legal, else raise."""
        allowed = REQUEST_TRANSITIONS.get(self.state, set())
        if new_state not in allowed:
            raise InvalidStateTransition(
                f"Cannot transition from {self.state.value} to {new_state.value}"
            )
        self.state = new_state

    def confirm(self) -> ConfirmedRide:
        """Accept the request and materialise the resulting ride."""
        self.transition_to(RequestState.ACCEPTED)
        return ConfirmedRide(
            driver_username=self.driver_username, destination=self.destination
        )
