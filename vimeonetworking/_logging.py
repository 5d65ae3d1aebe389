import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "VIMEO_LOG_LEVEL"


def log_level_from_environment(default: int = logging.INFO) -> int:
    """
    Level named by ``VIMEO_LOG_LEVEL`` (e.g. "DEBUG"), or ``default`` when it is unset or unknown.
    """
    name = os.getenv(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


class LoggerConfig:
    """
    Console logger for the vimeonetworking modules.

    Each module creates its own logger with ``LoggerConfig(logger_name=__name__)``, so
    records are named after the module that emitted them (``vimeonetworking._headers``,
    ``vimeonetworking._auth_client``...). A stream handler is attached only when the
    logger has none yet, which leaves applications free to configure logging themselves.

    Attributes:
        logger_name (str): Name of the logger instance.
        log_level (int): Logging level for the logger instance.
    """

    def __init__(self, logger_name: str = "vimeonetworking", log_level: Optional[int] = None):
        """
        Args:
            logger_name (str): Name of the logger instance. Default is 'vimeonetworking'.
            log_level (int, optional): Logging level. Defaults to ``VIMEO_LOG_LEVEL``, then logging.INFO.
        """
        self.logger_name = logger_name
        self.log_level = log_level if log_level is not None else log_level_from_environment()
        self.logger = self._initialize_logger()

    def _initialize_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.logger_name)
        logger.setLevel(self.log_level)

        if not logger.hasHandlers():
            handler = logging.StreamHandler()
            handler.setLevel(self.log_level)
            handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
            logger.addHandler(handler)

        return logger

    def get_logger(self) -> logging.Logger:
        return self.logger
