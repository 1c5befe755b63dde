"""Console logging setup for the sender."""

import logging
import os

__all__ = ["configure_logs", "resolve_level"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"


def resolve_level(name: str | None, default: int = logging.DEBUG) -> int:
    """Map a level name such as "info" to its logging constant.

    Unknown or empty names fall back to default.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logs() -> None:
    """Configure console logging for the sender process.

    Root logs at INFO through one console handler; aiohttp and asyncio
    are held at WARNING. Application loggers (src) use LOG_LEVEL from the
    environment, DEBUG when unset.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    for framework in ("aiohttp", "asyncio"):
        logging.getLogger(framework).setLevel(logging.WARNING)

    logging.getLogger("src").setLevel(resolve_level(os.getenv("LOG_LEVEL")))
