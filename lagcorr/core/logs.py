from __future__ import annotations

import sys

from loguru import logger

from lagcorr.core.config import AppConfig


def setup_logging(cfg: AppConfig, sink=sys.stderr) -> None:
    logger.remove()
    logger.add(sink, format=cfg.log_format, level=cfg.log_level)
