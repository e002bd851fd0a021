"""
Session orchestrator
====================

Sequences one interactive round for a single rider or driver::

    role -> register / login -> destination -> match -> accept / reject

All I/O goes through an injected ``Prompt`` so the same orchestrator can
be driven by the console, by tests, or by any other front end.  Domain
errors raised by the platform are turned into a ``RoundOutcome``; only
the username-taken case is retried (by re-prompting).
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from ridematch.domain.enums import Role
from ridematch.domain.errors import (
    DriverNotOffering,
    InvalidCredentials,
    InvalidIndex,
    InvalidPassword,
    NoMatchingDrivers,
    NoSuchPendingRequest,
    PlatformError,
    UsernameTaken,
)
from ridematch.services.platform import Platform
from ridematch.session.schemas import RideSummary, RoundOutcome, RoundStatus

logger = logging.getLogger(__name__)

ROLE_CHOICES = {"r": Role.RIDER, "d": Role.DRIVER}

_STATUS_BY_ERROR: dict[type[PlatformError], RoundStatus] = {
    InvalidPassword: RoundStatus.INVALID_PASSWORD,
    InvalidCredentials: RoundStatus.INVALID_CREDENTIALS,
    NoMatchingDrivers: RoundStatus.NO_MATCHING_DRIVERS,
    InvalidIndex: RoundStatus.INVALID_INDEX,
    DriverNotOffering: RoundStatus.DRIVER_NOT_OFFERING,
    NoSuchPendingRequest: RoundStatus.NO_SUCH_PENDING_REQUEST,
}


class Prompt(Protocol):
    def read_line(self, message: str) -> str:
        """Return one line of input, exactly as entered."""

    def read_choice(self, message: str) -> str:
        """Return one line of input, trimmed and lower-cased."""

    def show(self, message: str) -> None:
        """Display *message* to the user."""


class SessionOrchestrator:
    def __init__(self, platform: Platform, prompt: Prompt):
        self.platform = platform
        self.prompt = prompt

    # ── Public API ────────────────────────────────────────────────

    def run(self) -> list[RoundOutcome]:
        """Play rounds until the user asks to exit.  Returns every outcome."""
        outcomes: list[RoundOutcome] = []
        while True:
            outcomes.append(self.run_round())
            answer = self.prompt.read_choice(
                "Do you want to exit? Enter 'yes' to exit, 'no' to continue: "
            )
            if answer == "yes":
                break
        self.prompt.show("Exiting the program. Thank you!")
        return outcomes

    def run_round(self) -> RoundOutcome:
        role = ROLE_CHOICES.get(
            self.prompt.read_choice(
                "Are you a Rider or a Driver? Enter 'r' for Rider, 'd' for Driver: "
            )
        )
        if role is None:
            outcome = RoundOutcome(
                status=RoundStatus.INVALID_ROLE, message="Invalid input. Exiting."
            )
        else:
            outcome = self._play(role)
        logger.info("Round finished: %s", outcome.status.value)
        self.prompt.show(outcome.message)
        return outcome

    # ── Internals ─────────────────────────────────────────────────

    def _play(self, role: Role) -> RoundOutcome:
        self.prompt.show(f"-------{role.value} LOGIN/REGISTRATION-------")
        username: Optional[str] = None
        try:
            username = self._login(role)
            if role is Role.RIDER:
                return self._rider_round(username)
            return self._driver_round(username)
        except PlatformError as exc:
            status = _STATUS_BY_ERROR.get(type(exc))
            if status is None:
                raise
            return RoundOutcome(
                role=role, status=status, username=username, message=f"{exc}."
            )

    def _login(self, role: Role) -> str:
        is_new = self.prompt.read_choice(
            "Are you a new user? Enter 'yes' for new registration, 'no' for login: "
        )
        if is_new == "yes":
            self._register(role)

        username = self.prompt.read_line("Enter username for login: ")
        password = self.prompt.read_line("Enter password for login: ")
        if not self.platform.authenticate(role, username, password):
            raise InvalidCredentials(role, username)
        self.prompt.show(f"{role.value.title()} login successful!")
        return username

    def _register(self, role: Role) -> None:
        while True:
            username = self.prompt.read_line("Enter your username: ")
            if self.platform.exists(role, username):
                self.prompt.show("Username already taken. Choose a different username.")
                continue
            password = self.prompt.read_line("Enter password: ")
            try:
                self.platform.register(role, username, password)
            except UsernameTaken as exc:
                # lost a race with another registration
                self.prompt.show(f"{exc}. Choose a different username.")
                continue
            self.prompt.show(f"{role.value.title()} registration successful!")
            return

    def _rider_round(self, rider: str) -> RoundOutcome:
        destination = self.prompt.read_line("Enter your desired destination: ")
        self.platform.request_ride(rider, destination)

        drivers = self.platform.find_drivers(destination)
        if not drivers:
            raise NoMatchingDrivers(destination)
        self.prompt.show(f"Available Drivers for {destination}:")
        for i, driver in enumerate(drivers):
            self.prompt.show(f"{i}: {driver.username}")

        index = self._select(
            "Enter the index of the driver you want to request: ", drivers
        )
        driver = drivers[index].username
        if not self.platform.can_serve(driver, destination):
            raise DriverNotOffering(driver, destination)
        self.platform.propose(rider, driver)
        self.prompt.show(f"Ride request sent to {driver}")

        if self._confirm():
            ride = self.platform.accept(driver, rider)
            return RoundOutcome(
                role=Role.RIDER,
                status=RoundStatus.ACCEPTED,
                username=rider,
                counterpart=driver,
                message="Ride request accepted. Enjoy your ride!",
                ride=RideSummary.model_validate(ride),
            )
        self.platform.reject(driver, rider)
        return RoundOutcome(
            role=Role.RIDER,
            status=RoundStatus.REJECTED,
            username=rider,
            counterpart=driver,
            message="Ride request rejected.",
        )

    def _driver_round(self, driver: str) -> RoundOutcome:
        destination = self.prompt.read_line("Enter your offered destination: ")
        self.platform.offer_ride(driver, destination)

        pending = self.platform.pending_requests(driver)
        if not pending:
            return RoundOutcome(
                role=Role.DRIVER,
                status=RoundStatus.NO_PENDING_REQUESTS,
                username=driver,
                message="No ride requests at the moment.",
            )
        self.prompt.show("Ride Requests:")
        for i, request in enumerate(pending):
            self.prompt.show(f"{i}: {request.rider_username} -> {request.destination}")

        index = self._select(
            "Enter the index of the rider request you want to respond to: ", pending
        )
        rider = pending[index].rider_username

        if self._confirm():
            ride = self.platform.accept(driver, rider)
            return RoundOutcome(
                role=Role.DRIVER,
                status=RoundStatus.ACCEPTED,
                username=driver,
                counterpart=rider,
                message="Ride request accepted. Enjoy the ride!",
                ride=RideSummary.model_validate(ride),
            )
        self.platform.reject(driver, rider)
        return RoundOutcome(
            role=Role.DRIVER,
            status=RoundStatus.REJECTED,
            username=driver,
            counterpart=rider,
            message="Ride request rejected.",
        )

    def _select(self, message: str, items: Sequence[object]) -> int:
        raw = self.prompt.read_line(message).strip()
        try:
            index = int(raw)
        except ValueError:
            raise InvalidIndex(raw, len(items)) from None
        if not 0 <= index < len(items):
            raise InvalidIndex(raw, len(items))
        return index

    def _confirm(self) -> bool:
        answer = self.prompt.read_choice(
            "Do you want to accept the ride request? (yes/no): "
        )
        return answer == "yes"
