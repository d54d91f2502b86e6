# Path: knxproj/core/logger.py
"""
knxproj Module Logger

Centralized logging configuration for the knxproj module.

Architecture:
- Component-based logging (core, engine, extraction, decoding, cli)
- Optional file and console output
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from knxproj.core.config_loader import ConfigLoader
from knxproj.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_ACTIVITY_FILENAME,
    LOG_ERRORS_FILENAME,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_EXTRACTION,
    LOGGER_DECODING,
    LOGGER_CLI,
)


COMPONENT_LOGGERS = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'extraction': LOGGER_EXTRACTION,
    'decoding': LOGGER_DECODING,
    'cli': LOGGER_CLI,
}


class KnxProjLogger:
    """
    Centralized logger for the knxproj module.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'extraction')
        logger.info("[INPUT] Extracting project.knxproj")
        logger.info("[PROCESS] Expanding nested container P-0497.zip")
        logger.info("[OUTPUT] Extraction complete: 12 files")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize knxproj logger.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self._configured = False

    def configure(self, force: bool = False) -> None:
        """Configure logging system for the knxproj module."""
        if self._configured and not force:
            return

        log_dir = self.config.get('log_dir')
        log_level = self.config.get('log_level', 'INFO')
        console_output = self.config.get('log_console', False)
        level = getattr(logging, log_level.upper(), logging.INFO)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(level)

        # Clear any existing handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / LOG_ACTIVITY_FILENAME)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            # Error-only log file
            error_handler = logging.FileHandler(log_dir / LOG_ERRORS_FILENAME)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            logger.addHandler(error_handler)

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'extraction', 'decoding', 'cli')

        Returns:
            Configured logger instance
        """
        if not self._configured:
            self.configure()

        prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


# Global logger instance
_knxproj_logger = KnxProjLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for knxproj module component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'extraction', 'decoding', 'cli')

    Returns:
        Configured logger instance

    Example:
        from knxproj.core.logger import get_logger

        logger = get_logger(__name__, 'decoding')
        logger.info("[INPUT] Decoding P-0497/0.xml")
    """
    return _knxproj_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None, force: bool = False) -> None:
    """
    Configure knxproj logging system.

    Args:
        config: Optional ConfigLoader instance
        force: Re-apply handlers even if already configured
    """
    global _knxproj_logger

    if config:
        _knxproj_logger = KnxProjLogger(config)

    _knxproj_logger.configure(force=force)


__all__ = ['get_logger', 'configure_logging', 'KnxProjLogger']
