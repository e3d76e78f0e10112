"""Abstract base classes and shared helpers for payment file decoders."""

import codecs
from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Sequence

from ..models.core import FieldSpec, ParserConfig, Row, Table
from ..utils.error_handler import ErrorHandler, handle_file_access_error


class FileParser(ABC):
    """Abstract base class for all payment file decoders.

    A decoder turns the raw bytes of one file into a Table: a header row
    followed by one row of strings per record, in source order. Decoders
    keep no state between calls.
    """

    format_type: str = ""

    def __init__(self, config: ParserConfig, error_handler: Optional[ErrorHandler] = None):
        self.config = config
        # Collects errors only; leaves the package logger handlers alone.
        self.error_handler = error_handler or ErrorHandler(enable_console=False)
        self.text_decoder = TextDecoder(config)

    @abstractmethod
    def parse(self, data: bytes) -> Table:
        """Decode raw file bytes into a Table"""
        pass

    def parse_file(self, file_path: str) -> Table:
        """Read a file from disk and decode it"""
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            handle_file_access_error(self.error_handler, file_path, e)
            raise

        table = self.parse(data)
        self.error_handler.log_info(
            f"Decoded {len(table) - 1} rows from {file_path}",
            context={'file_path': file_path, 'format': self.format_type}
        )
        return table


class TextDecoder:
    """Turns raw bytes into lines and decoded records into rows"""

    def __init__(self, config: ParserConfig):
        self.config = config

    def decode(self, data: bytes) -> str:
        """Decode bytes with the configured encoding.

        A UTF-8 byte order mark is dropped and undecodable bytes become
        U+FFFD, so readable input never fails here.
        """
        encoding = self.config.encoding
        if codecs.lookup(encoding).name == 'utf-8':
            encoding = 'utf-8-sig'
        return data.decode(encoding, errors='replace')

    def split_lines(self, text: str) -> List[str]:
        """Split on LF or CRLF without touching other control characters"""
        return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]

    def header(self, specs: Sequence[FieldSpec], use_labels: bool = False) -> Row:
        return [spec.label if use_labels else spec.key for spec in specs]

    def project_row(self, values: Mapping[str, str], specs: Sequence[FieldSpec]) -> Row:
        """Lay out a record in FieldSpec order; missing keys become empty cells"""
        return [values.get(spec.key, "") or "" for spec in specs]
