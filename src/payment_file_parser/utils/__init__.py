"""Utility functions and helpers"""

from .config_manager import ConfigManager
from .error_handler import ErrorHandler, ErrorCategory, ErrorSeverity, handle_file_access_error, handle_parsing_error

__all__ = [
    'ConfigManager',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'handle_file_access_error',
    'handle_parsing_error',
]
