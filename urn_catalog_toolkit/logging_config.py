from __future__ import annotations

"""Central logging configuration for URN Catalog Toolkit.

Import and call :func:`setup_logging` at start-up.
"""

import logging
import logging.config
import os

from urn_catalog_toolkit.config import ConfigManager

__all__ = ["setup_logging"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging from ``logging.yml``, falling back to console only."""
    log_dir = os.environ.get("URN_CATALOG_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "app.log")

    try:
        logging_config = ConfigManager().get_logging_config()

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                logging_config["handlers"]["file"]["filename"] = log_file
            if verbose and "console" in logging_config.get("handlers", {}):
                logging_config["handlers"]["console"]["level"] = "DEBUG"

            logging.config.dictConfig(logging_config)
            logging.info("===== Logging initialised from config files =====")
        else:
            _setup_minimal_logging(verbose)
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
        print(f"Error loading logging config: {exc}")
        _setup_minimal_logging(verbose)

    _apply_debug_overrides()


def _setup_minimal_logging(verbose: bool) -> None:
    """Set up console-only logging when config is unavailable."""
    level = "DEBUG" if verbose else "INFO"
    minimal_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": level,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(minimal_config)
    logging.warning("===== Logging initialised with minimal fallback =====")


def _apply_debug_overrides() -> None:
    """Switch loggers listed in ``URN_CATALOG_DEBUG_MODULES`` to DEBUG.

    Example: ``URN_CATALOG_DEBUG_MODULES=urn_catalog_toolkit.core.host.tasks``
    """
    extra_modules = os.environ.get("URN_CATALOG_DEBUG_MODULES", "").strip()
    targets = [m.strip() for m in extra_modules.split(",") if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        has_debug_handler = any(
            h.level == logging.NOTSET or h.level <= logging.DEBUG for h in logger.handlers
        )
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            h.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
