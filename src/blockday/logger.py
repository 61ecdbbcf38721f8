# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "WARNING") -> None:
    """Route the package loggers through a rich handler on stderr."""
    global _configured

    package_logger = logging.getLogger("blockday")
    package_logger.setLevel(level.upper())
    if _configured:
        return

    handler = RichHandler(show_path=False, rich_tracebacks=True, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    _configured = True
