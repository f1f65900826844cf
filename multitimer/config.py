import os
from typing import List

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Storage
STORE_BACKEND = os.getenv("STORE_BACKEND", "sqlalchemy")  # "sqlalchemy" or "memory"
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./multitimer.db")

# Scheduling
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1.0"))

# Notifications
NOTIFICATION_FEED_SIZE = int(os.getenv("NOTIFICATION_FEED_SIZE", "50"))
EXPO_PUSH_TOKENS: List[str] = [
    token.strip()
    for token in os.getenv("EXPO_PUSH_TOKENS", "").split(",")
    if token.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
