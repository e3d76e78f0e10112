"""SWIFT MT101 tagged-field parser implementation."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple

from .base import FileParser
from ..models.core import Table
from ..models.field_specs import MT101_FIELDS


logger = logging.getLogger(__name__)

# ":32B:EUR1000,00" -> tag "32B", value "EUR1000,00". Tags are two digits
# plus optional letters/digits, or a letter-prefixed extension code (MPH01).
TAG_LINE = re.compile(r'^:([0-9]{2}[A-Z0-9]*|[A-Z]{2,}[0-9]+):(.*)$')

KNOWN_TAGS: FrozenSet[str] = frozenset(spec.source for spec in MT101_FIELDS)


@dataclass
class MT101ScanState:
    """Scanner state between two lines.

    Attributes:
        record: Tag values of the transaction being accumulated
        last_tag: Known tag that continuation lines are appended to
    """
    record: Dict[str, str] = field(default_factory=dict)
    last_tag: Optional[str] = None

    def has_fields(self, besides: Optional[str] = None) -> bool:
        return any(tag != besides for tag in self.record)


def match_tag_line(line: str) -> Optional[Tuple[str, str]]:
    """Split a tag line into (tag, value), or None for a non-tag line"""
    match = TAG_LINE.match(line)
    if not match:
        return None
    tag, value = match.groups()
    return tag, value.strip()


def scan_records(lines: Iterable[str],
                 boundary_tag: str = '21',
                 known_tags: FrozenSet[str] = KNOWN_TAGS) -> Iterator[Dict[str, str]]:
    """Group the lines of an MT101 message into transaction records.

    A record is closed when the boundary tag recurs after at least one other
    field has been stored, and at end of input. A boundary tag following
    another boundary tag with nothing in between replaces the earlier
    reference instead of producing a row of its own. Values of lines without
    a tag are appended to the last known tag, space separated, even when an
    unknown tag came in between.
    """
    state = MT101ScanState()

    for line in lines:
        tagged = match_tag_line(line)

        if tagged is None:
            text = line.strip()
            if text and state.last_tag is not None:
                state.record[state.last_tag] += f" {text}"
            continue

        tag, value = tagged

        if tag == boundary_tag and state.has_fields(besides=boundary_tag):
            yield state.record
            state = MT101ScanState()

        if tag in known_tags:
            state.record[tag] = value
            state.last_tag = tag

    if state.record:
        yield state.record


class MT101Parser(FileParser):
    """Parser for SWIFT MT101 request-for-transfer messages"""

    format_type = 'mt101'

    def parse(self, data: bytes) -> Table:
        """Decode an MT101 message into a header plus one row per transaction"""
        text = self.text_decoder.decode(data)
        lines = self.text_decoder.split_lines(text)

        rows: Table = [self.text_decoder.header(MT101_FIELDS, use_labels=True)]
        for record in scan_records(lines, boundary_tag=self.config.mt101_boundary_tag):
            rows.append(self.text_decoder.project_row(record, MT101_FIELDS))

        logger.debug(f"MT101: {len(rows) - 1} transactions from {len(lines)} lines")
        return rows
