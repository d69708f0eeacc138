# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Exceptions, Logging
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the storage layer:
- settings: Environment configuration management
- exceptions: Storage exception hierarchy
- logging: Package logger configuration
"""

from scaffold_db.core.settings import settings, get_settings, DatabaseProvider
from scaffold_db.core.exceptions import (
    AppException,
    DatabaseError,
    DatabaseConnectionError,
    DatabaseQueryError,
    DatabaseConstraintError,
    DatabaseNotFoundError,
    DatabaseValidationError,
)
from scaffold_db.core.logging import setup_logging, get_logger

__all__ = [
    "settings",
    "get_settings",
    "DatabaseProvider",
    "AppException",
    "DatabaseError",
    "DatabaseConnectionError",
    "DatabaseQueryError",
    "DatabaseConstraintError",
    "DatabaseNotFoundError",
    "DatabaseValidationError",
    "setup_logging",
    "get_logger",
]
