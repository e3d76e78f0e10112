"""File scanning, format detection and parser selection."""

import logging
import os
from typing import Dict, List, Optional, Type

from ..models.core import ParserConfig
from ..parsers.base import FileParser, TextDecoder
from ..parsers.cfonb_parser import CFONBParser
from ..parsers.mt101_parser import MT101Parser, match_tag_line
from ..parsers.xml_parser import XMLParser
from .error_handler import ErrorHandler


logger = logging.getLogger(__name__)

# Bytes inspected when sniffing the format of a .txt file.
SNIFF_SIZE = 4096


class FileScanner:
    """Scans directories for payment files with a mapped extension"""

    def __init__(self, config: ParserConfig):
        self.config = config

    def scan_directory(self, directory: str, recursive: bool = True) -> List[str]:
        """
        Scan directory for supported file types

        Args:
            directory: Directory path to scan
            recursive: Whether to scan subdirectories recursively

        Returns:
            Sorted list of file paths that match supported extensions
        """
        if not os.path.exists(directory):
            raise FileNotFoundError(f"Directory not found: {directory}")

        if not os.path.isdir(directory):
            raise ValueError(f"Path is not a directory: {directory}")

        found_files = []

        if recursive:
            for root, dirs, files in os.walk(directory):
                for file in files:
                    file_path = os.path.join(root, file)
                    if self._is_supported_file(file_path):
                        found_files.append(file_path)
        else:
            for item in os.listdir(directory):
                item_path = os.path.join(directory, item)
                if os.path.isfile(item_path) and self._is_supported_file(item_path):
                    found_files.append(item_path)

        return sorted(found_files)

    def _is_supported_file(self, file_path: str) -> bool:
        """Check if file has a supported extension and is not empty"""
        _, ext = os.path.splitext(file_path.lower())
        if ext not in self.config.format_mappings:
            return False
        try:
            return os.path.isfile(file_path) and os.path.getsize(file_path) > 0
        except OSError:
            return False


class FormatDetector:
    """Chooses a format from the file extension, sniffing text files.

    ``.txt`` is shared by CFONB and MT101, so an extension mapped to
    ``auto`` is resolved by looking for SWIFT tag lines in the content.
    """

    def __init__(self, config: ParserConfig):
        self.config = config
        self.text_decoder = TextDecoder(config)

    def detect_format(self, file_path: str) -> Optional[str]:
        """
        Detect file format based on extension and content

        Returns:
            Format type string ('mt101', 'cfonb', 'xml') or None if unsupported
        """
        if not os.path.exists(file_path):
            return None

        _, ext = os.path.splitext(file_path.lower())
        format_type = self.config.format_mappings.get(ext)
        if format_type is None:
            return None
        if format_type != 'auto':
            return format_type

        try:
            with open(file_path, 'rb') as f:
                sample = f.read(SNIFF_SIZE)
        except OSError as e:
            logger.warning(f"Cannot read {file_path} for format detection: {e}")
            return None

        return self.detect_text_format(sample)

    def detect_text_format(self, data: bytes) -> str:
        """Tell an MT101 message from a CFONB file by its first lines"""
        text = self.text_decoder.decode(data)
        if text.lstrip().startswith('<'):
            return 'xml'
        for line in self.text_decoder.split_lines(text)[:20]:
            if match_tag_line(line) is not None:
                return 'mt101'
        return 'cfonb'


class ParserFactory:
    """Factory for creating appropriate parser instances based on file format"""

    def __init__(self, config: ParserConfig, error_handler: Optional[ErrorHandler] = None):
        self.config = config
        self.error_handler = error_handler or ErrorHandler(config.log_directory)
        self.format_detector = FormatDetector(config)
        self._parser_classes: Dict[str, Type[FileParser]] = {
            'mt101': MT101Parser,
            'cfonb': CFONBParser,
            'xml': XMLParser,
        }

    def get_parser_for_file(self, file_path: str) -> Optional[FileParser]:
        """Get a parser instance for a file, or None if no parser fits"""
        format_type = self.format_detector.detect_format(file_path)
        if format_type is None:
            return None
        return self.get_parser_by_format(format_type)

    def get_parser_by_format(self, format_type: str) -> Optional[FileParser]:
        """Get a parser instance by format type ('mt101', 'cfonb', 'xml')"""
        parser_class = self._parser_classes.get(format_type)
        if parser_class is None:
            return None
        return parser_class(self.config, self.error_handler)

    def get_supported_formats(self) -> List[str]:
        return sorted(self._parser_classes)
