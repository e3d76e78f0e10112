"""Tests for configuration management."""

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

import yaml

from payment_file_parser.utils.config_manager import ConfigManager
from payment_file_parser.models.core import ParserConfig


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, 'test_config.json')

    def tearDown(self):
        """Clean up test fixtures"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_config_loading(self):
        """Test loading default configuration when no file exists"""
        manager = ConfigManager(config_path="nonexistent_file.json")
        config = manager.load_config()

        self.assertIsInstance(config, ParserConfig)
        self.assertEqual(config.encoding, "utf-8")
        self.assertEqual(config.cfonb_record_type, "04")
        self.assertEqual(config.mt101_boundary_tag, "21")
        self.assertEqual(config.ad_payment_currency, "EUR")
        self.assertEqual(config.format_mappings, {'.xml': 'xml', '.txt': 'auto'})

    def test_config_file_loading(self):
        """Test loading configuration from JSON file"""
        test_config = {
            "encoding": "latin-1",
            "cfonb_record_type": "06",
            "ad_payment_currency": "AED",
            "output_format": "json",
            "format_mappings": {".xml": "xml", ".cfonb": "cfonb"}
        }

        with open(self.config_file, 'w') as f:
            json.dump(test_config, f)

        manager = ConfigManager(config_path=self.config_file)
        config = manager.load_config()

        self.assertEqual(config.encoding, "latin-1")
        self.assertEqual(config.cfonb_record_type, "06")
        self.assertEqual(config.ad_payment_currency, "AED")
        self.assertEqual(config.output_format, "json")
        self.assertEqual(config.format_mappings[".cfonb"], "cfonb")

    def test_yaml_config_loading(self):
        """Test loading configuration from YAML file"""
        yaml_file = os.path.join(self.temp_dir, 'config.yml')
        with open(yaml_file, 'w') as f:
            yaml.dump({"mt101_boundary_tag": "20", "output_directory": "tables"}, f)

        config = ConfigManager(config_path=yaml_file).load_config()

        self.assertEqual(config.mt101_boundary_tag, "20")
        self.assertEqual(config.output_directory, "tables")

    def test_home_directory_yaml_config(self):
        """config.yaml in the user directory is picked up"""
        home_config = os.path.join(self.temp_dir, '.payment_file_parser', 'config.yaml')
        os.makedirs(os.path.dirname(home_config))
        with open(home_config, 'w') as f:
            yaml.dump({"ad_payment_currency": "CHF"}, f)

        working_dir = os.path.join(self.temp_dir, 'work')
        os.makedirs(working_dir)
        previous_dir = os.getcwd()
        os.chdir(working_dir)
        try:
            with patch.dict(os.environ, {'HOME': self.temp_dir}):
                config = ConfigManager().load_config()
        finally:
            os.chdir(previous_dir)

        self.assertEqual(config.ad_payment_currency, "CHF")

    def test_config_validation(self):
        """Invalid values fall back to defaults"""
        invalid_configs = [
            {"encoding": "no-such-codec"},
            {"cfonb_record_type": "4"},
            {"output_format": "xlsx"},
            {"format_mappings": {".txt": "pdf"}},
            {"ad_payment_currency": ""},
        ]

        for invalid_config in invalid_configs:
            with open(self.config_file, 'w') as f:
                json.dump(invalid_config, f)

            config = ConfigManager(config_path=self.config_file).load_config()

            self.assertEqual(config.encoding, "utf-8")
            self.assertEqual(config.cfonb_record_type, "04")
            self.assertEqual(config.output_format, "csv")
            self.assertEqual(config.ad_payment_currency, "EUR")

    def test_malformed_json_uses_defaults(self):
        with open(self.config_file, 'w') as f:
            f.write("{not json")

        config = ConfigManager(config_path=self.config_file).load_config()
        self.assertEqual(config.cfonb_record_type, "04")

    def test_config_template_generation(self):
        """Test configuration template generation"""
        template_file = os.path.join(self.temp_dir, 'nested', 'template.json')

        manager = ConfigManager()
        manager.save_config_template(template_file)

        with open(template_file, 'r') as f:
            template = json.load(f)

        self.assertEqual(template['cfonb_record_type'], '04')
        self.assertIn('.txt', template['format_mappings'])

        # The template itself must load cleanly
        config = ConfigManager(config_path=template_file).load_config()
        self.assertEqual(config.format_mappings['.mt101'], 'mt101')

    def test_config_caching(self):
        """Test configuration caching"""
        with open(self.config_file, 'w') as f:
            json.dump({"ad_payment_currency": "USD"}, f)

        manager = ConfigManager(config_path=self.config_file)
        config1 = manager.load_config()
        self.assertEqual(config1.ad_payment_currency, "USD")

        with open(self.config_file, 'w') as f:
            json.dump({"ad_payment_currency": "GBP"}, f)

        config2 = manager.load_config()
        self.assertEqual(config2.ad_payment_currency, "USD")

        config3 = manager.load_config(force_reload=True)
        self.assertEqual(config3.ad_payment_currency, "GBP")


if __name__ == '__main__':
    unittest.main()
