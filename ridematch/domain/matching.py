"""
Destination Matching
====================

A driver matches a requested destination when at least one of its
offers names exactly that destination.  Comparison is plain string
equality: no case folding, no whitespace trimming.

Complexity
----------
Let D = registered drivers, k_i = offers held by driver i.

* ``has_matching_offer``: O(k)
* ``find_drivers``:       O(sum k_i), one linear scan of every offer
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .entities import Offer


def has_matching_offer(offers: Iterable[Offer], destination: str) -> bool:
    """True iff any offer goes to *destination*.  Duplicates don't matter."""
    return any(offer.destination == destination for offer in offers)


def find_drivers(
    offers_by_driver: Mapping[str, Sequence[Offer]], destination: str
) -> list[str]:
    """
    Return usernames of drivers with a matching offer.

    Drivers are returned in the mapping's iteration order, so a caller
    passing a registration-ordered mapping gets a stable result.  An
    empty list (never an error) means nobody serves *destination*.
    """
    return [
        driver
        for driver, offers in offers_by_driver.items()
        if has_matching_offer(offers, destination)
    ]
