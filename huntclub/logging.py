import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def resolve_level(level: str | int | None = None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None, quiet: tuple[str, ...] = QUIET_LOGGERS) -> int:
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)
    # httpx logs each request URL at INFO, and calendar URLs carry the api key.
    for name in quiet:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    return resolved
