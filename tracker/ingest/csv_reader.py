# tracker/ingest/csv_reader.py
"""
Low-level CSV reading: line splitting, field tokenizing and header checks.
"""

import logging
import re
from typing import List, Tuple

from tracker.common.exceptions import EmptyFileError, HeaderMismatchError

logger = logging.getLogger(__name__)

BOM = "\ufeff"

PRODUCTIVITY_HEADERS = [
    "Emp No.", "Name", "Month", "Productive Hours", "Hours", "Productivity"
]
ROSTER_HEADERS = [
    "Name", "ID", "Personal Email", "Work Email", "Work Location",
    "Position", "Start Date", "Separation Date", "Birthday"
]

PRODUCTIVITY_MODE = "productivity"
ROSTER_MODE = "roster"

KNOWN_HEADER_SETS = {
    PRODUCTIVITY_MODE: PRODUCTIVITY_HEADERS,
    ROSTER_MODE: ROSTER_HEADERS,
}

MODE_LABELS = {
    PRODUCTIVITY_MODE: "Productivity Data",
    ROSTER_MODE: "Contractor Roster",
}

_WHITESPACE_RUN = re.compile(r"\s+")


def split_lines(content: str) -> List[str]:
    """Split raw content on newlines, dropping lines that are blank after trimming."""
    return [line for line in content.split("\n") if line.strip()]


def parse_csv_line(line: str) -> List[str]:
    """
    Tokenize a single CSV line with quote awareness.

    A double quote toggles the quoted state, except for an escaped pair ("")
    inside quotes which yields one literal quote. Commas outside quotes end
    a field. Every field is trimmed.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def split_simple_line(line: str) -> List[str]:
    """Naive comma split used by the roster format; literal quotes are stripped."""
    return [column.strip().replace('"', "") for column in line.split(",")]


def clean_header(header: str) -> str:
    return header.strip().replace('"', "").replace(BOM, "")


def normalize_header(header: str) -> str:
    """Lower-case a header and collapse whitespace runs for comparison."""
    return _WHITESPACE_RUN.sub(" ", header.strip().lower())


def headers_match(received: List[str], expected: List[str]) -> bool:
    """Compare header rows positionally, ignoring case and extra whitespace."""
    if len(received) != len(expected):
        return False
    return all(
        normalize_header(got) == normalize_header(want)
        for got, want in zip(received, expected)
    )


def read_header_and_rows(content: str, mode: str) -> Tuple[List[str], List[str]]:
    """
    Split an upload into its cleaned header and its data lines.

    Args:
        content: Decoded file content
        mode: PRODUCTIVITY_MODE or ROSTER_MODE

    Returns:
        (headers, data_lines)

    Raises:
        EmptyFileError: If there is no header plus at least one data row
        HeaderMismatchError: If the header row is not the one expected for mode
    """
    lines = split_lines(content)
    if len(lines) < 2:
        raise EmptyFileError()

    tokenize = parse_csv_line if mode == PRODUCTIVITY_MODE else split_simple_line
    headers = [clean_header(h) for h in tokenize(lines[0])]
    logger.info(f"Headers received: {headers}")

    check_headers(headers, mode)
    return headers, lines[1:]


def check_headers(headers: List[str], mode: str) -> None:
    """
    Raise HeaderMismatchError unless headers match the set for mode.

    When the headers belong to the other known upload format, the error tells
    the caller which upload type to switch to.
    """
    expected = KNOWN_HEADER_SETS[mode]
    if headers_match(headers, expected):
        return

    for other_mode, other_headers in KNOWN_HEADER_SETS.items():
        if other_mode != mode and headers_match(headers, other_headers):
            label = MODE_LABELS[other_mode]
            raise HeaderMismatchError(
                f"This appears to be a {label.lower()} file. "
                f"Please switch to '{label}' upload type.",
                expected=expected,
                received=headers,
                suggested_mode=other_mode,
            )

    raise HeaderMismatchError(
        f"CSV headers don't match expected format for {MODE_LABELS[mode].lower()}",
        expected=expected,
        received=headers,
    )
