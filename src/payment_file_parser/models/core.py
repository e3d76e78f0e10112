"""Core data models for the payment file parser."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union


# A row is an ordered list of string cells; a table is a header row
# followed by data rows in source order.
Row = List[str]
Table = List[Row]


@dataclass(frozen=True)
class FixedWidthField:
    """Column slice of a fixed-width record.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character, or None for end of line
        trim: Whether trailing whitespace is removed from the slice
    """
    start: int
    end: Optional[int]
    trim: bool = True

    def extract(self, line: str) -> str:
        value = line[self.start:self.end] if self.end is not None else line[self.start:]
        return value.rstrip() if self.trim else value


@dataclass(frozen=True)
class FieldSpec:
    """One output column of a decoder.

    Attributes:
        label: Human-readable column label shown by the field-mapping layer
        key: Stable output key the field-mapping layer matches on
        source: Where the value comes from; a tag (MT101), a dotted path
            (XML) or a FixedWidthField (CFONB)
    """
    label: str
    key: str
    source: Union[str, FixedWidthField]


@dataclass(frozen=True)
class DerivedField:
    """Extra column computed from the other cells of a decoded row.

    ``compute`` receives the row keyed by FieldSpec key and returns the
    cell value.
    """
    label: str
    key: str
    compute: Callable[[Dict[str, str]], str]


@dataclass
class ParserConfig:
    """Configuration for parser behavior"""
    encoding: str = "utf-8"
    cfonb_record_type: str = "04"
    mt101_boundary_tag: str = "21"
    ad_payment_currency: str = "EUR"
    output_directory: str = "output"
    output_format: str = "csv"
    log_directory: Optional[str] = None
    format_mappings: Optional[Dict[str, str]] = None

    def __post_init__(self):
        if self.format_mappings is None:
            self.format_mappings = {
                '.xml': 'xml',
                '.txt': 'auto',
            }


@dataclass
class ProcessingResult:
    """Result of file processing operation"""
    file_path: str
    format_type: str
    row_count: int
    output_file: str
    processing_time: float
    errors: List[str]
    warnings: List[str]
    success: bool
