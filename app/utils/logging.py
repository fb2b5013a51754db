# app/utils/logging.py
import logging
import sys

from app.utils.settings import LOG_LEVEL, LOG_FORMAT


def setup_logging(level: str | None = None, format_string: str | None = None) -> None:
    """
    Konfiguracja logowania dla calej aplikacji (stdout).
    """
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=format_string or LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # biblioteki sa zbyt gadatliwe na INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
