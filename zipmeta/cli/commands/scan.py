"""
Scan command implementation.

Thin wrapper around ZipSoftwareMetaProvider that handles CLI argument
parsing, configuration and output rendering.
"""
import json
import logging
import sys
from typing import Optional

import typer
from rich.markup import escape

from zipmeta.config_manager import ConfigManager
from zipmeta.config_validator import ConfigValidator
from zipmeta.provider_loader import create_provider
from zipmeta.rich_utils.ui_helpers import build_failures_table, build_records_table, get_console
from zipmeta.utils.exceptions import ZipMetaError


def configure_logging(config: dict) -> None:
    logging_config = config.get("logging") or {}
    handlers = [logging.StreamHandler()]
    if logging_config.get("file"):
        handlers.append(logging.FileHandler(logging_config["file"]))

    logging.basicConfig(
        level=getattr(logging, str(logging_config.get("level", "INFO")).upper()),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def scan_command(
    path: str = typer.Argument(..., help="Package path, or a pattern using ? and * in the file name"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
    output_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Stop at the first failure instead of skipping it"),
):
    """Extract metadata records for every boot file in the given packages."""
    console = get_console()

    config_manager = ConfigManager()
    config = config_manager.discover_and_load_config(config_path)
    config = config_manager.merge_config_and_args(config, output_json, strict)

    errors = ConfigValidator().validate_config(config, require_providers=True)
    if errors:
        for error in errors:
            console.print(f"[red]Configuration error:[/red] {escape(error)}")
        sys.exit(2)

    configure_logging(config)

    try:
        provider = create_provider(config)
        scan = provider.get_software(path)
        records = list(scan)
    except ZipMetaError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if (config.get("output") or {}).get("format") == "json":
        typer.echo(json.dumps({
            "records": [software.to_dict() for software in records],
            "failures": [failure.to_dict() for failure in scan.failures],
        }, indent=2))
    else:
        console.print(build_records_table(records))
        if scan.failures:
            console.print(build_failures_table(scan.failures))

    # Exit with appropriate code
    if scan.failures:
        sys.exit(1)
