"""Application-wide logging setup."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level_name: str = "INFO") -> None:
    """
    Configure the root logger.

    - Sets root logger level from LOG_LEVEL (falls back to INFO)
    - Sends logs to stdout so container platforms pick them up
    - Leaves existing handlers alone when Uvicorn already configured logging
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Quiet down the HTTP stack under the Supabase client
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
