"""Application-wide logging configuration.

Uniform console format: timestamp | level | module | message.
Call ``configure_logging`` once from ``create_app``; modules use
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).debug("Logging initialized with level %s", level)
