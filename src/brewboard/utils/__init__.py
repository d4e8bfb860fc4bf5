"""
Utils Package
=============
Utility functions for the BrewBoard dashboard.

Modules:
- logger: Centralized logging configuration
- validators: Form validation utilities
- constants: Seed data, storage keys and option lists
"""

from brewboard.utils.logger import configure_logging, get_logger, log_frame, LogContext
from brewboard.utils.validators import ValidationResult, ProductValidator

__all__ = [
    'configure_logging',
    'get_logger',
    'log_frame',
    'LogContext',
    'ValidationResult',
    'ProductValidator',
]
