# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path

from faris.core.config import settings


def setup_logging():
    """Configure root logging"""
    log_level = logging.DEBUG if settings.environment == "development" else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    # file handler (production)
    if settings.environment == "production":
        log_dir = Path("/app/logs")
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "faris.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if settings.environment == "production":
        root_logger.addHandler(file_handler)

    # passlib logs a noisy warning about the bcrypt version lookup
    logging.getLogger("passlib").setLevel(logging.ERROR)
