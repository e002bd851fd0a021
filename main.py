"""
Ride Matching Marketplace
=========================
Entry point. Run with: python main.py  (or the ``ridematch`` script)
"""

import logging

from ridematch.config import settings
from ridematch.services.platform import Platform
from ridematch.session.console import ConsolePrompt
from ridematch.session.orchestrator import SessionOrchestrator


def run() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    orchestrator = SessionOrchestrator(Platform(), ConsolePrompt())
    try:
        orchestrator.run()
    except (EOFError, KeyboardInterrupt):
        print("\nInput closed. Exiting the program.")


if __name__ == "__main__":
    run()
