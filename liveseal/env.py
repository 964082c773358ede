from __future__ import annotations

import logging
import os
from pathlib import Path

from .constants import LOGGER, MIN_SECRET_KEY_BYTES, SECRET_KEY_ENV


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer value.")


def load_env() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return
    from dotenv import load_dotenv

    load_dotenv(env_path, override=True)


def validate_env() -> None:
    raw_key = os.getenv(SECRET_KEY_ENV, "")
    if not raw_key.strip():
        raise RuntimeError(
            f"Missing required environment variable {SECRET_KEY_ENV}; "
            "signed events cannot be verified without a secret key."
        )
    if len(raw_key.encode()) < MIN_SECRET_KEY_BYTES:
        LOGGER.warning(
            "%s is shorter than %s bytes; use a longer random secret in production.",
            SECRET_KEY_ENV,
            MIN_SECRET_KEY_BYTES,
        )


def load_secret_key() -> bytes:
    validate_env()
    return os.environ[SECRET_KEY_ENV].encode()


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("LIVESEAL_DEBUG"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled
