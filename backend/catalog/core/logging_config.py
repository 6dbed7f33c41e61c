"""Logging setup applied once at application startup."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter(LOG_FORMAT))


def setup_logging(level: str = "INFO") -> None:
    """Attach the shared stream handler to the root logger at the configured level."""
    root = logging.getLogger()
    if handler not in root.handlers:
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
