import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def positive_int(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "today" is the local calendar date in this zone, not the UTC date
SCHEDULING_TIMEZONE = os.getenv("SCHEDULING_TIMEZONE", "Europe/Amsterdam")

DEFAULT_WEEKS_AHEAD = positive_int("DEFAULT_WEEKS_AHEAD", 8)
MIN_WEEKS_AHEAD = 1
MAX_WEEKS_AHEAD = 52

# Overview statistics cover 12 months, so average hours are spread over 52 weeks
STATS_WEEKS_IN_PERIOD = positive_int("STATS_WEEKS_IN_PERIOD", 52)
