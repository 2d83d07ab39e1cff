"""Logger factory for libpuppetdb components.

Loggers are named ``libpuppetdb.<component>`` (``libpuppetdb.connector``,
``libpuppetdb.transport``, ...) so applications can tune the whole library
through the ``libpuppetdb`` logger or a single component through its child.
"""

import logging
import os
from threading import Lock

LOG_LEVEL_ENV = "LIBPUPPETDB_LOG_LEVEL"
LOGGER_NAMESPACE = "libpuppetdb"

_SETUP_LOCK = Lock()
_SETUP_DONE = False


def _resolve_log_level(env_var: str = LOG_LEVEL_ENV) -> int:
    level_name = os.getenv(env_var, "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _setup_default_logging() -> None:
    global _SETUP_DONE
    if _SETUP_DONE:
        return

    with _SETUP_LOCK:
        if _SETUP_DONE:
            return

        # Leave applications that already configured logging alone.
        if not logging.getLogger().handlers:
            logging.basicConfig(
                level=_resolve_log_level(),
                format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            )

        _SETUP_DONE = True


def get_logger(component: str, namespace: str = LOGGER_NAMESPACE) -> logging.Logger:
    """Return the ``<namespace>.<component>`` logger, configuring defaults once."""
    _setup_default_logging()
    return logging.getLogger(f"{namespace}.{component}")
