"""Error handling and structured logging for the payment file parser."""

import json
import logging
import os
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any


class ErrorSeverity(Enum):
    """Error severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    FILE_ACCESS = "file_access"
    FILE_FORMAT = "file_format"
    SYSTEM = "system"


@dataclass
class ErrorDetail:
    """Detailed error information"""
    timestamp: str
    severity: str
    category: str
    error_code: str
    message: str
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    field_name: Optional[str] = None
    raw_value: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Optional[Dict[str, Any]] = None


class JSONFormatter(logging.Formatter):
    """Formats log records as one JSON object per line"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        for extra_field in ('error_code', 'file_path', 'category', 'context'):
            if hasattr(record, extra_field):
                log_entry[extra_field] = getattr(record, extra_field)

        return json.dumps(log_entry, default=str)


class ErrorHandler:
    """Collects decoder errors and warnings and forwards them to logging"""

    ERROR_CODES = {
        # File access errors
        "FILE_NOT_FOUND": "F001",
        "FILE_PERMISSION_DENIED": "F002",
        "FILE_WRITE_ERROR": "F003",

        # File format errors
        "UNSUPPORTED_FORMAT": "F101",
        "MALFORMED_FILE": "F102",
        "UNRECOGNIZED_STRUCTURE": "F103",

        # System errors
        "UNEXPECTED_ERROR": "S999"
    }

    def __init__(self, log_directory: Optional[str] = None, enable_console: bool = True):
        self.log_directory = Path(log_directory) if log_directory else None
        if self.log_directory is not None:
            self.log_directory.mkdir(parents=True, exist_ok=True)

        self.errors: List[ErrorDetail] = []
        self.warnings: List[ErrorDetail] = []

        self._setup_logging(enable_console)

    def _setup_logging(self, enable_console: bool):
        """Attach console and JSON-lines handlers to the package logger.

        Handlers already attached stay in place; a handler is only added
        when the logger does not have an equivalent one yet.
        """
        self.logger = logging.getLogger('payment_file_parser')
        self.logger.setLevel(logging.DEBUG)

        if enable_console and not any(
            getattr(handler, 'stream', None) is sys.stdout for handler in self.logger.handlers
        ):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(console_handler)

        if self.log_directory is None:
            return

        today = datetime.now().strftime('%Y%m%d')
        self._add_file_handler(self.log_directory / f"parser_{today}.jsonl", logging.DEBUG)
        self._add_file_handler(self.log_directory / f"errors_{today}.jsonl", logging.ERROR)

    def _add_file_handler(self, log_file: Path, level: int):
        path = os.path.abspath(log_file)
        for handler in self.logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
                return
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(file_handler)

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory = ErrorCategory.SYSTEM,
                  file_path: Optional[str] = None,
                  line_number: Optional[int] = None,
                  field_name: Optional[str] = None,
                  raw_value: Optional[str] = None,
                  exception: Optional[Exception] = None,
                  context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log an error with detailed information"""

        error_code = self.ERROR_CODES.get(error_type, "S999")
        stack_trace = None

        if exception:
            stack_trace = ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.ERROR.value,
            category=category.value,
            error_code=error_code,
            message=message,
            file_path=file_path,
            line_number=line_number,
            field_name=field_name,
            raw_value=raw_value,
            stack_trace=stack_trace,
            context=context or {}
        )

        self.errors.append(error_detail)

        self.logger.error(
            message,
            extra={
                'error_code': error_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return error_detail

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory = ErrorCategory.SYSTEM,
                    file_path: Optional[str] = None,
                    context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log a warning with detailed information"""

        warning_code = self.ERROR_CODES.get(warning_type, "W999")

        warning_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.WARNING.value,
            category=category.value,
            error_code=warning_code,
            message=message,
            file_path=file_path,
            context=context or {}
        )

        self.warnings.append(warning_detail)

        self.logger.warning(
            message,
            extra={
                'error_code': warning_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return warning_detail

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log informational message"""
        self.logger.info(message, extra={'context': context or {}})

    def clear_errors(self):
        """Clear all accumulated errors and warnings"""
        self.errors.clear()
        self.warnings.clear()

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def handle_file_access_error(error_handler: ErrorHandler,
                             file_path: str,
                             exception: Exception) -> ErrorDetail:
    """Handle common file access errors"""
    if isinstance(exception, FileNotFoundError):
        return error_handler.log_error(
            f"File not found: {file_path}",
            "FILE_NOT_FOUND",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    elif isinstance(exception, PermissionError):
        return error_handler.log_error(
            f"Permission denied accessing file: {file_path}",
            "FILE_PERMISSION_DENIED",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    else:
        return error_handler.log_error(
            f"File access error: {str(exception)}",
            "UNEXPECTED_ERROR",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )


def handle_parsing_error(error_handler: ErrorHandler,
                         file_path: Optional[str],
                         exception: Exception,
                         line_number: Optional[int] = None) -> ErrorDetail:
    """Handle a document that could not be parsed at all"""
    return error_handler.log_error(
        f"Failed to parse document: {str(exception)}",
        "MALFORMED_FILE",
        ErrorCategory.FILE_FORMAT,
        file_path=file_path,
        line_number=line_number,
        exception=exception
    )
