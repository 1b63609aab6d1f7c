"""Shared logging helpers for StreamVault."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI and server entry points.

    Per-file progress is logged at INFO and state transitions at DEBUG. Pass
    ``force=True`` to replace handlers installed earlier (e.g. by uvicorn).
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
