"""Command-line interface for the payment file parser."""

import logging
import os
import sys
import time
from typing import List, Optional

import click
from lxml import etree

from .models.core import FixedWidthField, ParserConfig, ProcessingResult
from .models.field_specs import FIELD_SPECS
from .utils.config_manager import ConfigManager
from .utils.csv_writer import CSVWriter
from .utils.error_handler import ErrorCategory, ErrorHandler
from .utils.file_scanner import FileScanner, ParserFactory


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class PaymentFileParserCLI:
    """Wires configuration, parsers and writers together for the commands"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_manager = ConfigManager(config_path)
        self.config: ParserConfig = self.config_manager.load_config()
        self.error_handler = ErrorHandler(self.config.log_directory, enable_console=False)
        self.file_scanner = FileScanner(self.config)
        self.parser_factory = ParserFactory(self.config, self.error_handler)
        self.csv_writer = CSVWriter(self.config)

    def collect_files(self, paths: List[str], recursive: bool = True) -> List[str]:
        """Expand directories into the supported files they contain"""
        files = []
        for path in paths:
            if os.path.isdir(path):
                files.extend(self.file_scanner.scan_directory(path, recursive))
            else:
                files.append(path)
        return files

    def process_file(self,
                     file_path: str,
                     format_type: str = 'auto',
                     output_format: Optional[str] = None,
                     output_directory: Optional[str] = None) -> ProcessingResult:
        """Decode one file and write its table to the output directory"""
        start = time.time()
        output_format = output_format or self.config.output_format

        if format_type == 'auto':
            parser = self.parser_factory.get_parser_for_file(file_path)
        else:
            parser = self.parser_factory.get_parser_by_format(format_type)

        if parser is None:
            message = f"No parser available for {file_path}"
            self.error_handler.log_error(message, "UNSUPPORTED_FORMAT", file_path=file_path)
            return ProcessingResult(file_path, format_type, 0, '', time.time() - start,
                                    [message], [], False)

        try:
            table = parser.parse_file(file_path)
        except (OSError, etree.XMLSyntaxError) as e:
            self.error_handler.clear_errors()
            return ProcessingResult(file_path, parser.format_type, 0, '', time.time() - start,
                                    [str(e)], [], False)

        output_file = self.csv_writer.generate_output_path(file_path, output_format, output_directory)
        try:
            self.csv_writer.write(table, output_file, output_format)
        except OSError as e:
            message = f"Cannot write {output_file}: {e}"
            self.error_handler.log_error(message, "FILE_WRITE_ERROR", ErrorCategory.FILE_ACCESS,
                                         file_path=file_path, exception=e)
            self.error_handler.clear_errors()
            return ProcessingResult(file_path, parser.format_type, 0, '', time.time() - start,
                                    [message], [], False)

        warnings = [w.message for w in self.error_handler.warnings]
        self.error_handler.clear_errors()

        return ProcessingResult(
            file_path=file_path,
            format_type=parser.format_type,
            row_count=len(table) - 1,
            output_file=output_file,
            processing_time=time.time() - start,
            errors=[],
            warnings=warnings,
            success=True
        )


@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Payment File Parser - Convert MT101, CFONB and ISO 20022 files to tables"""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['cli'] = PaymentFileParserCLI(config)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.option('--format', 'format_type', default='auto',
              type=click.Choice(['auto', 'mt101', 'cfonb', 'xml']), help='Input format')
@click.option('--output-format', '-o', type=click.Choice(['csv', 'json']), help='Output file format')
@click.option('--output-dir', '-d', help='Directory for output files')
@click.option('--stdout', 'to_stdout', is_flag=True, help='Print tables instead of writing files')
@click.option('--no-recursive', is_flag=True, help='Disable recursive directory scanning')
@click.pass_context
def parse(ctx, paths, format_type, output_format, output_dir, to_stdout, no_recursive):
    """Decode payment files into tables"""

    cli_instance = ctx.obj['cli']
    files = cli_instance.collect_files(list(paths), recursive=not no_recursive)

    if not files:
        click.echo("No files found to process")
        return

    failed = 0
    for file_path in files:
        if to_stdout:
            failed += _print_table(cli_instance, file_path, format_type, output_format)
            continue

        result = cli_instance.process_file(file_path, format_type, output_format, output_dir)
        if result.success:
            click.echo(f"✓ {file_path} [{result.format_type}]: {result.row_count} rows -> {result.output_file}")
            for warning in result.warnings:
                click.echo(f"  ⚠ {warning}")
        else:
            failed += 1
            click.echo(f"✗ {file_path}: {'; '.join(result.errors)}")

    if failed:
        sys.exit(1)


def _print_table(cli_instance: PaymentFileParserCLI, file_path: str,
                 format_type: str, output_format: Optional[str]) -> int:
    factory = cli_instance.parser_factory
    parser = (factory.get_parser_for_file(file_path) if format_type == 'auto'
              else factory.get_parser_by_format(format_type))
    if parser is None:
        click.echo(f"✗ No parser available for {file_path}", err=True)
        return 1
    try:
        table = parser.parse_file(file_path)
    except (OSError, etree.XMLSyntaxError) as e:
        click.echo(f"✗ {file_path}: {e}", err=True)
        return 1
    click.echo(cli_instance.csv_writer.render(table, output_format or cli_instance.config.output_format))
    return 0


@cli.command()
@click.argument('format_name', type=click.Choice(sorted(FIELD_SPECS)))
def fields(format_name):
    """Show the columns emitted for a format"""

    for spec in FIELD_SPECS[format_name]:
        source = spec.source
        if isinstance(source, FixedWidthField):
            source = f"[{source.start}:{'' if source.end is None else source.end}]"
        click.echo(f"{spec.key:<22} {spec.label:<40} {source}")


@cli.command()
@click.argument('output_path', default='parser_config.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, format):
    """Generate configuration template file"""

    if format == 'yaml' and not output_path.endswith(('.yml', '.yaml')):
        output_path = output_path.replace('.json', '.yml')
    elif format == 'json' and not output_path.endswith('.json'):
        output_path = output_path.replace('.yml', '.json').replace('.yaml', '.json')

    try:
        ctx.obj['cli'].config_manager.save_config_template(output_path)
        click.echo(f"✓ Configuration template generated: {output_path}")
    except OSError as e:
        click.echo(f"✗ Error generating config template: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
