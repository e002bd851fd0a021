"""Console ``Prompt`` backed by stdin / stdout."""

from __future__ import annotations


class ConsolePrompt:
    def read_line(self, message: str) -> str:
        return input(message)

    def read_choice(self, message: str) -> str:
        return input(message).strip().lower()

    def show(self, message: str) -> None:
        print(message)
