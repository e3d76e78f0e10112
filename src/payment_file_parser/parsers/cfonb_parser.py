"""CFONB fixed-width file parser implementation."""

import logging

from .base import FileParser
from ..models.core import Row, Table
from ..models.field_specs import CFONB_FIELDS


logger = logging.getLogger(__name__)


class CFONBParser(FileParser):
    """Parser for CFONB fixed-width transfer files.

    Every line starts with a two character record type. Only transaction
    records (``config.cfonb_record_type``, "04" by default) are turned into
    rows; header, trailer and total records are skipped.
    """

    format_type = 'cfonb'

    def parse(self, data: bytes) -> Table:
        """Decode a CFONB file into a header plus one row per transaction record"""
        text = self.text_decoder.decode(data)
        lines = [line for line in self.text_decoder.split_lines(text) if line.strip()]

        rows: Table = [self.text_decoder.header(CFONB_FIELDS)]
        skipped = 0

        for line in lines:
            if line[:2] != self.config.cfonb_record_type:
                skipped += 1
                continue
            rows.append(self.extract_record(line))

        logger.debug(
            f"CFONB: {len(rows) - 1} transaction records, {skipped} other records skipped"
        )
        return rows

    def extract_record(self, line: str) -> Row:
        """Slice one line into its 15 columns; short lines give empty cells"""
        return [spec.source.extract(line) for spec in CFONB_FIELDS]
