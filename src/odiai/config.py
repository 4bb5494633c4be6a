"""
Runtime configuration read from the environment (.env supported via python-dotenv).
"""

import os
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_TRANSLATE_MODEL = os.getenv("OPENAI_TRANSLATE_MODEL", "gpt-4o-mini")

# Quiet period after the last keystroke before a request is issued
DEBOUNCE_SECONDS = float(os.getenv("TRANSLATE_DEBOUNCE_MS") or "400") / 1000

DEFAULT_HISTORY_PATH = "odiai_history.json"


def history_path() -> str:
    # Read late so the path can be swapped between app startups (tests)
    return os.getenv("ODIAI_HISTORY_PATH", DEFAULT_HISTORY_PATH)


def allowed_origins() -> list[str]:
    origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def is_production() -> bool:
    return os.getenv("ENVIRONMENT") == "production"
