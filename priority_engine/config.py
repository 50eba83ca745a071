"""Environment configuration for the priority engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
load_dotenv(_env_path)


class Config:
    """Runtime settings read from the environment."""

    LOG_LEVEL = os.getenv("PRIORITY_ENGINE_LOG_LEVEL", "INFO")

    # Hours after an event's end before an incomplete event is postponed
    POSTPONE_AFTER_HOURS = float(os.getenv("PRIORITY_ENGINE_POSTPONE_AFTER_HOURS", "24"))

    # How far ahead recurring events are expanded by the CLI
    RECURRENCE_WINDOW_DAYS = int(os.getenv("PRIORITY_ENGINE_RECURRENCE_WINDOW_DAYS", "14"))
