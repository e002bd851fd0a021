"""Pydantic schemas describing the result of one interactive round."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel

from ridematch.domain.enums import Role


class RoundStatus(str, enum.Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    INVALID_ROLE = "INVALID_ROLE"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NO_MATCHING_DRIVERS = "NO_MATCHING_DRIVERS"
    NO_PENDING_REQUESTS = "NO_PENDING_REQUESTS"
    INVALID_INDEX = "INVALID_INDEX"
    DRIVER_NOT_OFFERING = "DRIVER_NOT_OFFERING"
    NO_SUCH_PENDING_REQUEST = "NO_SUCH_PENDING_REQUEST"


class RideSummary(BaseModel):
    driver_username: str
    destination: str

    model_config = {"from_attributes": True}


class RoundOutcome(BaseModel):
    role: Optional[Role] = None
    status: RoundStatus
    username: Optional[str] = None
    counterpart: Optional[str] = None
    message: str
    ride: Optional[RideSummary] = None
