"""Output formatters for bar rows."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

# Rows written to files or pipes are not wrapped to a terminal width.
FILE_TABLE_WIDTH = 200


class OutputFormatter:
    """Protocol-like base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str],
    ) -> None:
        """Render the provided rows to the target stream."""

        raise NotImplementedError


def _format_value(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render bars as a Rich table."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str],
    ) -> None:
        width = None if stream.isatty() else FILE_TABLE_WIDTH
        console = Console(
            file=stream,
            color_system=None if self.no_color else "auto",
            no_color=self.no_color,
            width=width,
        )
        table = Table(box=SIMPLE, show_lines=False)
        header_style = "" if self.no_color else "bold"
        for column in columns:
            justify = "right" if column in {"open", "high", "low", "close", "volume"} else "left"
            table.add_column(column, header_style=header_style, justify=justify)

        if not rows:
            console.print(table)
            console.print("No data available.")
            return

        for row in rows:
            table.add_row(*(_format_value(row.get(column)) or "-" for column in columns))
        console.print(table)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render bars as JSON Lines."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str],
    ) -> None:
        for row in rows:
            json.dump({column: _format_value(row.get(column)) for column in columns}, stream, ensure_ascii=False)
            stream.write("\n")
        stream.flush()


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    msg = f"Unsupported format '{name}'. Available formats: table, jsonl."
    raise ValueError(msg)


__all__ = ["OutputFormatter", "TableFormatter", "JSONLFormatter", "create_formatter"]
