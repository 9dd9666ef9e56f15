"""Centralized logging utilities for the mcmcscan package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


class ScanLogger:
    """Factory class for configured mcmcscan loggers."""

    _formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    @classmethod
    def get_logger(
        cls,
        name: str = "mcmcscan",
        level: Optional[int] = None,
        log_file: Optional[str] = None,
        propagate: bool = False,
    ) -> logging.Logger:
        """
        Return a logger with consistent mcmcscan formatting/handlers.

        Loggers below the package root (e.g. ``mcmcscan.samplers``) share the
        root's stream handler through propagation; only the package root gets
        its own handler. The package root does not propagate further unless
        asked to. The level is left untouched unless given.
        """
        logger = logging.getLogger(name)
        if level is not None:
            logger.setLevel(level)

        is_root = "." not in name
        if is_root:
            logger.propagate = propagate
            if logger.level == logging.NOTSET:
                logger.setLevel(logging.INFO)
            has_stream_handler = any(
                type(handler) is logging.StreamHandler for handler in logger.handlers
            )
            if not has_stream_handler:
                stream_handler = logging.StreamHandler()
                stream_handler.setFormatter(cls._formatter)
                logger.addHandler(stream_handler)
        elif not logging.getLogger(name.split(".", 1)[0]).handlers:
            cls.get_logger(name.split(".", 1)[0])

        if log_file is not None:
            log_path = Path(log_file)
            has_file_handler = any(
                isinstance(handler, logging.FileHandler)
                and Path(handler.baseFilename) == log_path.resolve()
                for handler in logger.handlers
            )
            if not has_file_handler:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path)
                file_handler.setFormatter(cls._formatter)
                logger.addHandler(file_handler)

        return logger
