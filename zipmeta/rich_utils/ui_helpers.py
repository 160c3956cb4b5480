import os
import sys
from typing import Iterable, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zipmeta.models import ProcessingFailure, SoftwareInfo


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stdout.isatty()
    )


def get_console() -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True)
    # Interactive terminal - full Rich capabilities
    return Console()


def _value(obj, attribute: str) -> str:
    value = getattr(obj, attribute, None) if obj is not None else None
    return "" if value is None else escape(str(value))


def build_records_table(records: Iterable[SoftwareInfo]) -> Table:
    table = Table(title="Firmware builds")
    for column in ("Category", "Product", "Version", "Language", "Platform", "Revision", "Source", "Encoding"):
        table.add_column(column)

    for software in records:
        table.add_row(
            _value(software.category, "name"),
            _value(software.product, "name"),
            _value(software.product, "version"),
            _value(software.product, "language"),
            _value(software.camera, "platform"),
            _value(software.camera, "revision"),
            _value(software.source, "name"),
            _value(software.encoding, "name"),
        )
    return table


def build_failures_table(failures: List[ProcessingFailure]) -> Table:
    table = Table(title="Failures", style="red")
    for column in ("Level", "Path", "Archive", "Entry", "Error"):
        table.add_column(column)

    for failure in failures:
        table.add_row(
            failure.level,
            escape(failure.path),
            escape(failure.archive_name or ""),
            escape(failure.entry_name or ""),
            escape(f"{type(failure.error).__name__}: {failure.error}"),
        )
    return table
