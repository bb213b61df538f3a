"""Logging setup for the College Events API process."""

import logging
import sys

from college_events.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers kept quieter than the service's own
_QUIET_LOGGERS = {
    # passlib logs a trapped version-check error against newer bcrypt builds
    "passlib": logging.ERROR,
    "multipart": logging.WARNING,
}


def resolve_level(settings: Settings) -> int:
    """LOG_LEVEL when set, otherwise DEBUG in debug mode and INFO elsewhere."""
    if settings.log_level:
        return logging.getLevelName(settings.log_level)
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging(settings: Settings) -> None:
    """Send all records to stdout at the level the settings ask for."""
    logging.basicConfig(
        level=resolve_level(settings),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
