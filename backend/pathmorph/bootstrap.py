"""Process-level setup for hosts embedding the morphing engine."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from pathmorph.config import Settings, settings


def configure_logging(config: Settings | None = None) -> None:
    """Load ``.env`` and configure the root logger from ``PATHMORPH_LOG_LEVEL``."""
    load_dotenv()
    config = config or settings

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
