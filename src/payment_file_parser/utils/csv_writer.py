"""Table output: CSV files, JSON records and pandas DataFrames."""

import csv
import json
import os
from datetime import datetime
from typing import Dict, List

import pandas as pd

from ..models.core import ParserConfig, Table


def table_to_dataframe(table: Table) -> pd.DataFrame:
    """Build a DataFrame from a Table, keeping every cell as a string"""
    if not table:
        return pd.DataFrame()
    return pd.DataFrame(table[1:], columns=table[0], dtype=str)


def table_to_records(table: Table) -> List[Dict[str, str]]:
    """Data rows keyed by header cell, the shape the field-mapping layer consumes"""
    if not table:
        return []
    header = table[0]
    return [dict(zip(header, row)) for row in table[1:]]


class CSVWriter:
    """Writes decoded tables next to each other in the output directory"""

    def __init__(self, config: ParserConfig):
        self.config = config

    def write_table(self, table: Table, output_path: str) -> None:
        """Write a Table to CSV, header row first

        Raises:
            OSError: If the file cannot be written
        """
        self._ensure_parent(output_path)
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.writer(csvfile)
            writer.writerows(table)

    def write_records(self, table: Table, output_path: str) -> None:
        """Write the data rows as a JSON list of objects keyed by header"""
        self._ensure_parent(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(table_to_records(table), f, indent=2, ensure_ascii=False)

    def write(self, table: Table, output_path: str, output_format: str = None) -> None:
        output_format = output_format or self.config.output_format
        if output_format == 'json':
            self.write_records(table, output_path)
        else:
            self.write_table(table, output_path)

    def generate_output_path(self, source_file_path: str, output_format: str = None,
                             output_directory: str = None) -> str:
        """Keep the source filename and append the output extension"""
        output_format = output_format or self.config.output_format
        directory = output_directory or self.config.output_directory
        filename = f"{os.path.basename(source_file_path)}.{output_format}"
        return self.create_unique_filename(os.path.join(directory, filename))

    def create_unique_filename(self, base_path: str) -> str:
        """Create unique filename if file already exists"""
        if not os.path.exists(base_path):
            return base_path

        path_without_ext, ext = os.path.splitext(base_path)

        counter = 1
        while counter <= 999:
            new_path = f"{path_without_ext}_{counter:03d}{ext}"
            if not os.path.exists(new_path):
                return new_path
            counter += 1

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{path_without_ext}_{timestamp}{ext}"

    def render(self, table: Table, output_format: str) -> str:
        """Render a Table as text for printing to stdout"""
        if output_format == 'json':
            return json.dumps(table_to_records(table), indent=2, ensure_ascii=False)
        return table_to_dataframe(table).to_csv(index=False)

    @staticmethod
    def _ensure_parent(output_path: str) -> None:
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
