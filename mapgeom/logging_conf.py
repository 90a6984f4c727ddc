#!/usr/bin/env python3
# mapgeom/logging_conf.py
"""
Central logging setup for mapgeom.
Supports console and optional rotating file logs.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from mapgeom.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(cfg: Config) -> Optional[RotatingFileHandler]:
    """Configure the root logger from cfg["logging"]; returns the file handler if one was added."""
    level_name = cfg["logging"].get("level", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("mapgeom").setLevel(level)

    log_file = cfg["logging"].get("file")
    if not log_file:
        return None

    handler = RotatingFileHandler(
        log_file,
        maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
        backupCount=int(cfg["logging"].get("rotate_keep", 3)),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler
