"""
Logging setup.

Modules either import the shared ``logger`` or create their own with
``setup_logger(__name__)``.
"""

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"
_ROOT_NAME = "audit_dashboard"

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stderr handler to the package logger."""
    global _configured

    root = logging.getLogger(_ROOT_NAME)
    if level:
        root.setLevel(level.upper())
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    if not level:
        root.setLevel(logging.INFO)
    _configured = True


def setup_logger(name: str) -> logging.Logger:
    """Get a logger that lives under the package logger hierarchy."""
    if not name.startswith(_ROOT_NAME):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


logger = setup_logger(_ROOT_NAME)
