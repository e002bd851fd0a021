"""
Shared test fixtures.

Every test gets its own ``Platform`` so no state leaks between cases.
bcrypt runs at its minimum cost factor to keep the suite fast.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable

import pytest

from ridematch.domain.enums import Role
from ridematch.infrastructure.passwords import PasswordHasher
from ridematch.services.platform import Platform
from ridematch.session.orchestrator import SessionOrchestrator

TEST_HASH_ROUNDS = 4


class ScriptedPrompt:
    """``Prompt`` that replays canned answers and records what was shown."""

    def __init__(self, answers: Iterable[str]):
        self.answers = deque(answers)
        self.asked: list[str] = []
        self.shown: list[str] = []

    def read_line(self, message: str) -> str:
        self.asked.append(message)
        if not self.answers:
            raise EOFError(f"No scripted answer for prompt {message!r}")
        return self.answers.popleft()

    def read_choice(self, message: str) -> str:
        return self.read_line(message).strip().lower()

    def show(self, message: str) -> None:
        self.shown.append(message)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_HASH_ROUNDS)


@pytest.fixture
def platform(hasher: PasswordHasher) -> Platform:
    return Platform(hasher=hasher)


@pytest.fixture
def seeded(platform: Platform) -> Platform:
    """alice drives to Downtown, bob rides."""
    platform.register(Role.DRIVER, "alice", "pw")
    platform.offer_ride("alice", "Downtown")
    platform.register(Role.RIDER, "bob", "pw")
    return platform


@pytest.fixture
def scripted(platform: Platform) -> Callable[..., tuple[SessionOrchestrator, ScriptedPrompt]]:
    """Build an orchestrator over the test platform from a list of answers."""

    def _build(*answers: str) -> tuple[SessionOrchestrator, ScriptedPrompt]:
        prompt = ScriptedPrompt(answers)
        return SessionOrchestrator(platform, prompt), prompt

    return _build
