"""
Logging configuration.

We use a YAML logging config (`src/travelmatch/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `TRAVELMATCH_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from travelmatch.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # Copy so the cached config is not mutated between calls.
    config = dict(get_logging_config())

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    config["handlers"] = {
        name: ({**handler, "level": level} if isinstance(handler, dict) and "level" in handler else handler)
        for name, handler in config.get("handlers", {}).items()
    }

    logging.config.dictConfig(config)
