"""Process-wide logging configuration.

`setup_logging()` is idempotent; later calls are no-ops.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = ("tree_sitter",)

_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once."""
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
