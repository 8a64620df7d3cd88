# tracker/export/csv_writer.py
"""
CSV writer for downloads.

Output opens cleanly in spreadsheet software: UTF-8 BOM up front, and any
cell that a spreadsheet would evaluate as a formula is neutralized with a
leading apostrophe.
"""

from typing import Any, Iterable, Sequence

BOM = "\ufeff"

FORMULA_PREFIXES = ("=", "+", "-", "@")
QUOTE_TRIGGERS = (",", '"', "\n", "\r")


def escape_csv_field(value: Any) -> str:
    """
    Render one cell.

    Args:
        value: Cell value; None renders as an empty cell

    Returns:
        Escaped cell text
    """
    if value is None:
        return ""

    text = str(value)
    if text.startswith("\t") or text.strip().startswith(FORMULA_PREFIXES):
        text = "'" + text

    if any(trigger in text for trigger in QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def generate_csv(rows: Iterable[Sequence[Any]]) -> str:
    """BOM followed by the escaped rows joined with newlines (no trailing newline)."""
    lines = [",".join(escape_csv_field(value) for value in row) for row in rows]
    return BOM + "\n".join(lines)
