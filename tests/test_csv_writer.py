"""Tests for table output."""

import csv
import json
import os
import shutil
import tempfile

from payment_file_parser.models.core import ParserConfig
from payment_file_parser.utils.csv_writer import CSVWriter, table_to_dataframe, table_to_records


TABLE = [
    ['BeneficiaryID', 'BeneficiaryName', 'Reference', 'Amount', 'Currency'],
    ['B2', 'Bob, Builder', 'R2', '100.50', 'EUR'],
    ['B3', 'Émile', '', '007', 'EUR'],
]


class TestCSVWriter:
    """Test cases for CSVWriter"""

    def setup_method(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config = ParserConfig(output_directory=self.temp_dir)
        self.writer = CSVWriter(self.config)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_write_table(self):
        output_path = os.path.join(self.temp_dir, 'out', 'payments.csv')
        self.writer.write_table(TABLE, output_path)

        with open(output_path, newline='', encoding='utf-8') as f:
            assert list(csv.reader(f)) == TABLE

    def test_write_records(self):
        output_path = os.path.join(self.temp_dir, 'payments.json')
        self.writer.write(TABLE, output_path, 'json')

        with open(output_path, encoding='utf-8') as f:
            records = json.load(f)

        assert records[0] == {
            'BeneficiaryID': 'B2', 'BeneficiaryName': 'Bob, Builder',
            'Reference': 'R2', 'Amount': '100.50', 'Currency': 'EUR',
        }
        assert records[1]['Amount'] == '007'

    def test_generate_output_path_is_unique(self):
        first = self.writer.generate_output_path('/data/in/transfer.xml')
        assert first == os.path.join(self.temp_dir, 'transfer.xml.csv')

        self.writer.write_table(TABLE, first)
        second = self.writer.generate_output_path('/data/in/transfer.xml')
        assert second == os.path.join(self.temp_dir, 'transfer.xml_001.csv')

    def test_render(self):
        assert self.writer.render(TABLE, 'csv').splitlines()[0] == ','.join(TABLE[0])
        assert json.loads(self.writer.render(TABLE, 'json'))[1]['BeneficiaryName'] == 'Émile'


class TestTableConversion:
    """Test cases for Table conversion helpers"""

    def test_dataframe_keeps_strings(self):
        df = table_to_dataframe(TABLE)

        assert list(df.columns) == TABLE[0]
        assert df.shape == (2, 5)
        assert df.loc[1, 'Amount'] == '007'

    def test_header_only_table(self):
        assert table_to_records([['Error']]) == []
        assert table_to_dataframe([['Error']]).shape == (0, 1)

    def test_empty_table(self):
        assert table_to_records([]) == []
        assert table_to_dataframe([]).empty
