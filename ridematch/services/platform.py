"""
Ride-matching platform
======================

The ``Platform`` is the one context object every operation goes
through.  It owns the identity store, the offer registry and the
pending-request table, and applies the business rules on top of the
plain repositories.  There is no module-level state: each ``Platform``
instance is an isolated marketplace.

Request lifecycle
-----------------
::

    (no request) --propose--> PENDING --accept--> ACCEPTED  (removed)
                                      --reject--> REJECTED  (removed)

A driver keeps at most one pending request per rider; proposing again
replaces the earlier request.  Accepting writes the rider's single
confirmed-ride slot, rejecting leaves it untouched.

Concurrency safety
------------------
Built for one interactive session at a time, but still safe to share:

* Registration runs under a store-wide lock, so the username
  uniqueness check and insert are atomic.
* propose / accept / reject hold the target driver's lock for the whole
  check-and-mutate, so a (rider, driver) pair never ends up with two
  pending requests and a request is never resolved twice.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ridematch.config import settings
from ridematch.domain.entities import Account, ConfirmedRide, Offer, RideRequest
from ridematch.domain.enums import RequestState, Role
from ridematch.domain.errors import (
    DriverNotOffering,
    NoSuchPendingRequest,
    UnknownAccount,
    UsernameTaken,
)
from ridematch.domain.matching import find_drivers, has_matching_offer
from ridematch.infrastructure.locks import KeyedLock
from ridematch.infrastructure.passwords import PasswordHasher
from ridematch.infrastructure.repositories import (
    AccountRepository,
    OfferRepository,
    RideRequestRepository,
    RiderStateRepository,
)

logger = logging.getLogger(__name__)


class Platform:
    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self.hasher = hasher or PasswordHasher(settings.password_hash_rounds)
        self.accounts = AccountRepository()
        self.offers = OfferRepository()
        self.requests = RideRequestRepository()
        self.riders = RiderStateRepository()
        self._registration_lock = threading.Lock()
        self._driver_locks = KeyedLock("driver")

    # ── Identity store ────────────────────────────────────────────

    def register(self, role: Role, username: str, password: str) -> Account:
        """Create an account, or raise ``UsernameTaken`` / ``InvalidPassword``."""
        # Hash outside the lock: bcrypt is deliberately slow.
        password_hash = self.hasher.hash(password)
        with self._registration_lock:
            if self.accounts.contains(role, username):
                raise UsernameTaken(role, username)
            account = self.accounts.add(
                Account(role=role, username=username, password_hash=password_hash)
            )
        logger.info("Registered %s %r", role.value.lower(), username)
        return account

    def authenticate(self, role: Role, username: str, password: str) -> bool:
        account = self.accounts.get(role, username)
        if account is None or not self.hasher.verify(password, account.password_hash):
            logger.info("Failed %s login for %r", role.value.lower(), username)
            return False
        return True

    def exists(self, role: Role, username: str) -> bool:
        return self.accounts.contains(role, username)

    def get_account(self, role: Role, username: str) -> Account:
        account = self.accounts.get(role, username)
        if account is None:
            raise UnknownAccount(role, username)
        return account

    # ── Offer registry ────────────────────────────────────────────

    def offer_ride(self, driver_username: str, destination: str) -> Offer:
        self.get_account(Role.DRIVER, driver_username)
        offer = self.offers.add(
            Offer(driver_username=driver_username, destination=destination)
        )
        logger.info("Driver %r offers a ride to %r", driver_username, destination)
        return offer

    def offers_for(self, driver_username: str) -> tuple[Offer, ...]:
        self.get_account(Role.DRIVER, driver_username)
        return self.offers.get_for_driver(driver_username)

    # ── Matching ──────────────────────────────────────────────────

    def find_drivers(self, destination: str) -> list[Account]:
        """Drivers offering *destination*, in registration order."""
        drivers = self.accounts.list_by_role(Role.DRIVER)
        offers_by_driver = {
            d.username: self.offers.get_for_driver(d.username) for d in drivers
        }
        matched = set(find_drivers(offers_by_driver, destination))
        return [d for d in drivers if d.username in matched]

    def can_serve(self, driver_username: str, destination: str) -> bool:
        return has_matching_offer(self.offers_for(driver_username), destination)

    # ── Request lifecycle ─────────────────────────────────────────

    def request_ride(self, rider_username: str, destination: str) -> None:
        """Record *destination* as the rider's current request."""
        self.get_account(Role.RIDER, rider_username)
        self.riders.set_requested_destination(rider_username, destination)

    def requested_destination(self, rider_username: str) -> str:
        self.get_account(Role.RIDER, rider_username)
        return self.riders.get_requested_destination(rider_username)

    def propose(
        self,
        rider_username: str,
        driver_username: str,
        destination: Optional[str] = None,
    ) -> RideRequest:
        """
        Put a pending request from the rider on the driver's table.

        *destination* defaults to the rider's requested destination.  The
        driver must hold a matching offer, else ``DriverNotOffering``.
        """
        self.get_account(Role.RIDER, rider_username)
        self.get_account(Role.DRIVER, driver_username)
        if destination is None:
            destination = self.riders.get_requested_destination(rider_username)

        with self._driver_locks.hold(driver_username):
            if not has_matching_offer(
                self.offers.get_for_driver(driver_username), destination
            ):
                raise DriverNotOffering(driver_username, destination)
            request = RideRequest(
                rider_username=rider_username,
                driver_username=driver_username,
                destination=destination,
            )
            replaced = self.requests.put(request)

        if replaced is not None:
            logger.info(
                "Rider %r re-proposed to driver %r (%r replaces %r)",
                rider_username, driver_username, destination, replaced.destination,
            )
        else:
            logger.info(
                "Rider %r proposed to driver %r for %r",
                rider_username, driver_username, destination,
            )
        return request

    def accept(self, driver_username: str, rider_username: str) -> ConfirmedRide:
        """Resolve the pair's pending request as ACCEPTED and confirm the ride."""
        with self._driver_locks.hold(driver_username):
            request = self._pending_or_raise(driver_username, rider_username)
            ride = request.confirm()
            self.requests.remove(driver_username, rider_username)
            self.riders.set_confirmed_ride(rider_username, ride)
        logger.info(
            "Driver %r accepted rider %r for %r",
            driver_username, rider_username, ride.destination,
        )
        return ride

    def reject(self, driver_username: str, rider_username: str) -> RideRequest:
        """Resolve the pair's pending request as REJECTED."""
        with self._driver_locks.hold(driver_username):
            request = self._pending_or_raise(driver_username, rider_username)
            request.transition_to(RequestState.REJECTED)
            self.requests.remove(driver_username, rider_username)
        logger.info("Driver %r rejected rider %r", driver_username, rider_username)
        return request

    def pending_requests(self, driver_username: str) -> list[RideRequest]:
        self.get_account(Role.DRIVER, driver_username)
        return self.requests.get_for_driver(driver_username)

    def confirmed_ride(self, rider_username: str) -> Optional[ConfirmedRide]:
        self.get_account(Role.RIDER, rider_username)
        return self.riders.get_confirmed_ride(rider_username)

    def _pending_or_raise(self, driver_username: str, rider_username: str) -> RideRequest:
        request = self.requests.get(driver_username, rider_username)
        if request is None or not request.is_pending:
            logger.info(
                "No pending request from rider %r to driver %r",
                rider_username, driver_username,
            )
            raise NoSuchPendingRequest(driver_username, rider_username)
        return request
