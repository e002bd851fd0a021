"""Domain enumerations and state-transition rules."""

import enum


class Role(str, enum.Enum):
    DRIVER = "DRIVER"
    RIDER = "RIDER"


class RequestState(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# State machine: maps current state -> set of valid next states.
# "No request" is the absence of a record, so it has no entry here.
REQUEST_TRANSITIONS: dict[RequestState, set[RequestState]] = {
    RequestState.PENDING: {RequestState.ACCEPTED, RequestState.REJECTED},
    RequestState.ACCEPTED: set(),
    RequestState.REJECTED: set(),
}
