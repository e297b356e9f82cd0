"""
Core Package

Application configuration, logging, and core utilities.

Modules:
- config: Settings management (Pydantic)
- logging: Logging setup
- exceptions: Custom exception classes
"""

from kickstarter_etl.core.config import get_settings, settings
from kickstarter_etl.core.logging import create_rotating_file_handler, get_logger, setup_logging

__all__ = [
    "get_settings",
    "settings",
    "create_rotating_file_handler",
    "get_logger",
    "setup_logging",
]
