"""Root logger setup driven by the environment."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_LEVEL_ENV_VAR = "GYMDESK_LOG_LEVEL"


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Set up the root logger for CLI output.

    Without an explicit ``level`` the level comes from ``GYMDESK_LOG_LEVEL``
    (INFO when unset). ``force=True`` replaces handlers installed earlier.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level() -> int:
    raw = optional_env_var(LOG_LEVEL_ENV_VAR)
    if raw is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level in {LOG_LEVEL_ENV_VAR}: {raw}")
    return level
