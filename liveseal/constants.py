from __future__ import annotations

import logging

LOGGER = logging.getLogger("liveseal")
APP_VERSION = "0.1.0"

SECRET_KEY_ENV = "LIVESEAL_SECRET_KEY"
MIN_SECRET_KEY_BYTES = 32

SESSION_COOKIE = "liveseal_session"
SESSION_HEADER = "x-liveseal-session"
DEFAULT_EVENTS_PATH = "/events"
