"""Domain errors raised by the platform and reported by the session layer."""

from __future__ import annotations

from .enums import Role


class PlatformError(Exception):
    """Base class for every user-facing domain error."""


class UsernameTaken(PlatformError):
    """Raised when registering a username already present for that role."""

    def __init__(self, role: Role, username: str):
        self.role = role
        self.username = username
        super().__init__(f"{role.value.lower()} username {username!r} is already taken")


class InvalidPassword(PlatformError):
    """Raised when a password cannot be stored (empty or over 72 bytes)."""


class InvalidCredentials(PlatformError):
    """Raised when a login attempt fails."""

    def __init__(self, role: Role, username: str):
        self.role = role
        self.username = username
        super().__init__(f"Invalid {role.value.lower()} credentials")


class UnknownAccount(PlatformError):
    """Raised when an operation names an unregistered username."""

    def __init__(self, role: Role, username: str):
        self.role = role
        self.username = username
        super().__init__(f"No {role.value.lower()} registered as {username!r}")


class NoMatchingDrivers(PlatformError):
    """Raised when no driver offers the requested destination."""

    def __init__(self, destination: str):
        self.destination = destination
        super().__init__(f"No available drivers for {destination!r}")


class InvalidIndex(PlatformError):
    """Raised when a list selection is out of bounds or not a number."""

    def __init__(self, raw: str, size: int):
        self.raw = raw
        self.size = size
        super().__init__(f"Invalid index {raw!r} (expected 0..{size - 1})")


class DriverNotOffering(PlatformError):
    """Raised when proposing to a driver with no offer for the destination."""

    def __init__(self, driver_username: str, destination: str):
        self.driver_username = driver_username
        self.destination = destination
        super().__init__(
            f"Driver {driver_username!r} is not offering a ride to {destination!r}"
        )


class NoSuchPendingRequest(PlatformError):
    """Raised when accepting/rejecting a request that is not pending."""

    def __init__(self, driver_username: str, rider_username: str):
        self.driver_username = driver_username
        self.rider_username = rider_username
        super().__init__(
            f"No pending request from rider {rider_username!r} "
            f"to driver {driver_username!r}"
        )
