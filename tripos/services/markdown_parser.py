"""
Markdown Block Parser.
Splits a generated itinerary document into typed display blocks.
"""
import re
from typing import Optional

from ..models.blocks import (
    Block,
    Blockquote,
    CheckboxItem,
    Heading,
    ListItem,
    Paragraph,
    Table,
)


ORDERED_ITEM_PATTERN = re.compile(r"^(\d+)\.")

# Longer prefixes first so '#### x' is never read as a level-2 heading
HEADING_PREFIXES = (("#### ", 4), ("### ", 3), ("## ", 2))


def split_table_row(line: str) -> list[str]:
    """Split a pipe row into trimmed cells, dropping the boundary pipes."""
    line = line.strip()
    parts = line.split("|")
    if line.startswith("|"):
        parts = parts[1:]
    if line.endswith("|") and parts:
        parts = parts[:-1]
    return [cell.strip() for cell in parts]


class _TableBuilder:
    """Accumulates pipe rows until the table is flushed."""

    def __init__(self, header: list[str]):
        self.header = header
        self.alignments: list[str] = []
        self.rows: list[list[str]] = []

    def add(self, line: str):
        if "---" in line:
            self.alignments = split_table_row(line)
        else:
            self.rows.append(split_table_row(line))

    def build(self) -> Table:
        return Table(header=self.header, rows=self.rows, alignments=self.alignments)


class MarkdownBlockParser:
    """
    Line-oriented parser for the itinerary markdown dialect.

    Never fails: every line becomes one block or, if blank, nothing.
    """

    def parse(self, text: str) -> list[Block]:
        """
        Parse a full document.

        Args:
            text: Markdown document

        Returns:
            Blocks in source order
        """
        lines = text.split("\n")
        blocks: list[Block] = []
        table: Optional[_TableBuilder] = None

        for index, line in enumerate(lines):
            trimmed = line.strip()

            if trimmed.startswith("|"):
                if table is None:
                    table = _TableBuilder(split_table_row(trimmed))
                else:
                    table.add(trimmed)

                # Close the table unless the next line continues it
                next_line = lines[index + 1].strip() if index + 1 < len(lines) else ""
                if not next_line.startswith("|"):
                    blocks.append(table.build())
                    table = None
                continue

            block = self._parse_line(trimmed)
            if block is not None:
                blocks.append(block)

        return blocks

    def _parse_line(self, trimmed: str) -> Optional[Block]:
        """Classify a single non-table line."""
        for prefix, level in HEADING_PREFIXES:
            if trimmed.startswith(prefix):
                return Heading(level=level, text=trimmed[len(prefix):])

        if trimmed.startswith("- ") or trimmed.startswith("* "):
            content = trimmed[2:]
            if content.startswith("[ ]") or content.startswith("[x]"):
                return CheckboxItem(
                    text=content[3:].strip(),
                    checked=content.startswith("[x]")
                )
            return ListItem(text=content.strip())

        match = ORDERED_ITEM_PATTERN.match(trimmed)
        if match:
            return ListItem(
                text=trimmed[trimmed.index(".") + 1:].strip(),
                ordered=True,
                number=int(match.group(1))
            )

        if trimmed.startswith("> "):
            return Blockquote(text=trimmed[2:])

        if trimmed:
            return Paragraph(text=trimmed)

        return None


# Global parser instance
markdown_parser = MarkdownBlockParser()
