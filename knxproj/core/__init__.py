# Path: knxproj/core/__init__.py
"""
knxproj Core Module

Core utilities: configuration and logging.
"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
]
