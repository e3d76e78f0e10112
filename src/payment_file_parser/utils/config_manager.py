"""Configuration management for the payment file parser."""

import codecs
import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from ..models.core import ParserConfig


logger = logging.getLogger(__name__)

VALID_OUTPUT_FORMATS = ('csv', 'json')
VALID_FORMAT_TYPES = ('auto', 'mt101', 'cfonb', 'xml')


class ConfigManager:
    """Manages loading and validation of parser configuration"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[ParserConfig] = None

    def load_config(self, force_reload: bool = False) -> ParserConfig:
        """Load parser configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            ParserConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()
        defaults = ParserConfig()

        self._config_cache = ParserConfig(
            encoding=config_data.get('encoding', defaults.encoding),
            cfonb_record_type=config_data.get('cfonb_record_type', defaults.cfonb_record_type),
            mt101_boundary_tag=config_data.get('mt101_boundary_tag', defaults.mt101_boundary_tag),
            ad_payment_currency=config_data.get('ad_payment_currency', defaults.ad_payment_currency),
            output_directory=config_data.get('output_directory', defaults.output_directory),
            output_format=config_data.get('output_format', defaults.output_format),
            log_directory=config_data.get('log_directory'),
            format_mappings=config_data.get('format_mappings'),
        )

        logger.info(f"Configuration loaded from {self.config_path or 'defaults'}")
        return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no file found or invalid
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            self._validate_config_data(data)
            logger.info(f"Configuration loaded from {config_file}")
            return data

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error reading configuration file {config_file}: {e}. Using defaults.")
            return {}

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations"""
        if self.config_path:
            return self.config_path

        search_paths = [
            'parser_config.json',
            'parser_config.yml',
            'parser_config.yaml',
            'config/parser_config.json',
            'config/parser_config.yml',
            'config/parser_config.yaml',
            os.path.expanduser('~/.payment_file_parser/config.json'),
            os.path.expanduser('~/.payment_file_parser/config.yml'),
            os.path.expanduser('~/.payment_file_parser/config.yaml'),
        ]

        for path in search_paths:
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        for str_key in ['encoding', 'cfonb_record_type', 'mt101_boundary_tag',
                        'ad_payment_currency', 'output_directory', 'output_format']:
            if str_key in data:
                if not isinstance(data[str_key], str):
                    raise ValueError(f"{str_key} must be a string")
                if not data[str_key].strip():
                    raise ValueError(f"{str_key} cannot be empty")

        if 'encoding' in data:
            try:
                codecs.lookup(data['encoding'])
            except LookupError:
                raise ValueError(f"Unknown encoding: {data['encoding']}")

        if 'cfonb_record_type' in data and len(data['cfonb_record_type']) != 2:
            raise ValueError("cfonb_record_type must be exactly 2 characters")

        if 'output_format' in data and data['output_format'] not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(VALID_OUTPUT_FORMATS)}")

        if data.get('log_directory') is not None and not isinstance(data['log_directory'], str):
            raise ValueError("log_directory must be a string")

        if 'format_mappings' in data:
            mappings = data['format_mappings']
            if not isinstance(mappings, dict):
                raise ValueError("format_mappings must be a dictionary")
            for ext, format_type in mappings.items():
                if not isinstance(ext, str) or not ext.startswith('.'):
                    raise ValueError(f"Invalid extension in format_mappings: {ext}")
                if format_type not in VALID_FORMAT_TYPES:
                    raise ValueError(f"Invalid format type for {ext}: {format_type}")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = {
            "encoding": "utf-8",
            "cfonb_record_type": "04",
            "mt101_boundary_tag": "21",
            "ad_payment_currency": "EUR",
            "output_directory": "output",
            "output_format": "csv",
            "log_directory": "logs",
            "format_mappings": {
                ".xml": "xml",
                ".txt": "auto",
                ".cfonb": "cfonb",
                ".mt101": "mt101"
            }
        }

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if output_path.endswith(('.yml', '.yaml')):
                yaml.dump(template, f, default_flow_style=False, indent=2)
            else:
                json.dump(template, f, indent=2)

        logger.info(f"Configuration template saved to {output_path}")
