"""
Repository Pattern -- in-memory stores behind a narrow, domain-shaped API.

Each repository owns one kind of record and exposes only the queries the
platform needs.  Nothing here enforces business rules; that is the
platform's job.  All state lives in process memory and is lost on exit.
"""

from __future__ import annotations

from typing import Optional

from ridematch.domain.entities import Account, ConfirmedRide, Offer, RideRequest
from ridematch.domain.enums import Role


class AccountRepository:
    """Two independent username namespaces, one per role."""

    def __init__(self):
        self._accounts: dict[Role, dict[str, Account]] = {role: {} for role in Role}

    def add(self, account: Account) -> Account:
        self._accounts[account.role][account.username] = account
        return account

    def get(self, role: Role, username: str) -> Optional[Account]:
        return self._accounts[role].get(username)

    def contains(self, role: Role, username: str) -> bool:
        return username in self._accounts[role]

    def list_by_role(self, role: Role) -> list[Account]:
        """Accounts of *role* in registration order."""
        return list(self._accounts[role].values())


class OfferRepository:
    def __init__(self):
        self._offers: dict[str, list[Offer]] = {}

    def add(self, offer: Offer) -> Offer:
        self._offers.setdefault(offer.driver_username, []).append(offer)
        return offer

    def get_for_driver(self, driver_username: str) -> tuple[Offer, ...]:
        return tuple(self._offers.get(driver_username, ()))


class RideRequestRepository:
    """Pending requests per driver, keyed by rider, in proposal order."""

    def __init__(self):
        self._pending: dict[str, dict[str, RideRequest]] = {}

    def put(self, request: RideRequest) -> Optional[RideRequest]:
        """Store *request*, returning the one it replaced (if any)."""
        pending = self._pending.setdefault(request.driver_username, {})
        previous = pending.pop(request.rider_username, None)
        pending[request.rider_username] = request
        return previous

    def get(self, driver_username: str, rider_username: str) -> Optional[RideRequest]:
        return self._pending.get(driver_username, {}).get(rider_username)

    def remove(self, driver_username: str, rider_username: str) -> Optional[RideRequest]:
        return self._pending.get(driver_username, {}).pop(rider_username, None)

    def get_for_driver(self, driver_username: str) -> list[RideRequest]:
        return list(self._pending.get(driver_username, {}).values())


class RiderStateRepository:
    """Per-rider requested destination and single confirmed-ride slot."""

    def __init__(self):
        self._requested: dict[str, str] = {}
        self._confirmed: dict[str, ConfirmedRide] = {}

    def set_requested_destination(self, rider_username: str, destination: str) -> None:
        self._requested[rider_username] = destination

    def get_requested_destination(self, rider_username: str) -> str:
        return self._requested.get(rider_username, "")

    def set_confirmed_ride(self, rider_username: str, ride: ConfirmedRide) -> None:
        self._confirmed[rider_username] = ride

    def get_confirmed_ride(self, rider_username: str) -> Optional[ConfirmedRide]:
        return self._confirmed.get(rider_username)
