"""Tests for file scanning, format detection and parser selection."""

import os
import shutil
import tempfile

import pytest

from payment_file_parser.models.core import ParserConfig
from payment_file_parser.parsers import CFONBParser, MT101Parser, XMLParser
from payment_file_parser.utils.file_scanner import FileScanner, FormatDetector, ParserFactory


MT101_TEXT = ":20:SENDREF\n:21:TX1\n:32B:EUR5,00\n"
CFONB_TEXT = "0330004" + " " * 150 + "\n0430004" + " " * 250 + "\n"
XML_TEXT = "<Payments><Payment><BeneficiaryID>B1</BeneficiaryID></Payment></Payments>"


class TestFormatDetection:
    """Test cases for FormatDetector and ParserFactory"""

    def setup_method(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config = ParserConfig()
        self.detector = FormatDetector(self.config)
        self.factory = ParserFactory(self.config)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, name, content):
        path = os.path.join(self.temp_dir, name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_detect_by_extension_and_content(self):
        assert self.detector.detect_format(self._write('transfer.xml', XML_TEXT)) == 'xml'
        assert self.detector.detect_format(self._write('swift.txt', MT101_TEXT)) == 'mt101'
        assert self.detector.detect_format(self._write('cfonb.txt', CFONB_TEXT)) == 'cfonb'

    def test_unsupported_or_missing_file(self):
        assert self.detector.detect_format(self._write('report.pdf', 'x')) is None
        assert self.detector.detect_format(os.path.join(self.temp_dir, 'missing.xml')) is None

    def test_detect_text_format(self):
        assert self.detector.detect_text_format(b'free text\n:21:TX1\n') == 'mt101'
        assert self.detector.detect_text_format(b'0430004\n') == 'cfonb'
        assert self.detector.detect_text_format(b'  <?xml version="1.0"?><a/>') == 'xml'

    def test_configured_mapping(self):
        config = ParserConfig(format_mappings={'.dat': 'cfonb', '.txt': 'mt101'})
        detector = FormatDetector(config)

        assert detector.detect_format(self._write('bank.dat', MT101_TEXT)) == 'cfonb'
        assert detector.detect_format(self._write('cfonb.txt', CFONB_TEXT)) == 'mt101'

    def test_parser_for_file(self):
        assert isinstance(self.factory.get_parser_for_file(self._write('a.xml', XML_TEXT)), XMLParser)
        assert isinstance(self.factory.get_parser_for_file(self._write('a.txt', MT101_TEXT)), MT101Parser)
        assert isinstance(self.factory.get_parser_for_file(self._write('b.txt', CFONB_TEXT)), CFONBParser)
        assert self.factory.get_parser_for_file(self._write('c.csv', 'a,b')) is None

    def test_parser_by_format(self):
        assert isinstance(self.factory.get_parser_by_format('cfonb'), CFONBParser)
        assert self.factory.get_parser_by_format('qif') is None
        assert self.factory.get_supported_formats() == ['cfonb', 'mt101', 'xml']

    def test_parsers_share_factory_error_handler(self):
        parser = self.factory.get_parser_by_format('xml')
        assert parser.error_handler is self.factory.error_handler


class TestFileScanner:
    """Test cases for FileScanner"""

    def setup_method(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.scanner = FileScanner(ParserConfig())

        for name, content in [('a.xml', XML_TEXT), ('b.txt', MT101_TEXT),
                              ('empty.txt', ''), ('notes.md', '# notes'),
                              (os.path.join('sub', 'c.txt'), CFONB_TEXT)]:
            path = os.path.join(self.temp_dir, name)
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'w') as f:
                f.write(content)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_scan_recursive(self):
        files = self.scanner.scan_directory(self.temp_dir)
        names = [os.path.relpath(f, self.temp_dir) for f in files]

        assert names == ['a.xml', 'b.txt', os.path.join('sub', 'c.txt')]

    def test_scan_non_recursive(self):
        files = self.scanner.scan_directory(self.temp_dir, recursive=False)
        assert [os.path.basename(f) for f in files] == ['a.xml', 'b.txt']

    def test_scan_missing_directory(self):
        with pytest.raises(FileNotFoundError):
            self.scanner.scan_directory(os.path.join(self.temp_dir, 'missing'))
