import os
import logging

import dotenv

logger = logging.getLogger(__name__)

dotenv.load_dotenv()


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}; using {default}")
        return default


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}; using {default}")
        return default


GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 8000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MODEL_NAME = os.getenv("SOMMELIER_MODEL", "gemini-2.0-flash")
MAX_OUTPUT_TOKENS = _int_env("SOMMELIER_MAX_OUTPUT_TOKENS", 380)
TIMEOUT_SECONDS = _float_env("SOMMELIER_TIMEOUT_SECONDS", 30.0)

# Outbound completion budget
RATE_LIMIT_CALLS = _int_env("SOMMELIER_RATE_LIMIT_CALLS", 60)
RATE_LIMIT_PERIOD = _int_env("SOMMELIER_RATE_LIMIT_PERIOD", 60)  # seconds

CATALOG_FIELDS = os.getenv("SOMMELIER_CATALOG_FIELDS", "catalog")
CATALOG_FILE = os.getenv("SOMMELIER_CATALOG_FILE")

STATIC_DIR = os.getenv("SOMMELIER_STATIC_DIR", "public")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SOMMELIER_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
