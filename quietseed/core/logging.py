"""Logging setup shared by the API process and the seed script."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the root logger at *level*.

    Calling it again only adjusts the level, so app factories and scripts can
    both call it safely.
    """

    root = logging.getLogger()
    if not any(getattr(h, "_quietseed_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, "_quietseed_handler", True)
        root.addHandler(handler)
    root.setLevel(level.upper())
