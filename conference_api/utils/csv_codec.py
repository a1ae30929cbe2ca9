"""
CSV Codec for Schedule Export/Import

RFC 4180 style writer and reader used by the schedule export and import
operations. Description fields legitimately contain commas, quotes and
embedded newlines, so records are split by a quote-aware state machine rather
than by line.

Spreadsheet formula protection:
- On write, a field whose text starts with '-', '+', '=' or '@' (optionally
  behind single quotes) gets a leading single quote and is always quoted, so
  spreadsheet applications treat it as text.
- On read, one leading single quote is stripped again when it is followed by
  another single quote or one of '-', '+', '=', '@'.

The pair round-trips exactly: parse_csv_line(escape_csv_field(x)) == [x].
"""

import re
from typing import Any, Iterable, List, Sequence

_SPECIAL_CHARS = (',', '"', '\r', '\n')
_NEEDS_PROTECTION = re.compile(r"^'*[-+=@]")
_PROTECTED = re.compile(r"^'+[-+=@]")


def escape_csv_field(value: Any, protect_formulas: bool = True) -> str:
    """Escape a single field for CSV output.

    Args:
        value: Field value; None becomes an empty field
        protect_formulas: Prefix formula-like text with a single quote

    Returns:
        The field text, quoted with internal quotes doubled when needed

    Examples:
        >>> escape_csv_field('Hello, world')
        '"Hello, world"'
        >>> escape_csv_field('=SUM(A1)')
        '"\\'=SUM(A1)"'
    """
    if value is None:
        return ''
    text = str(value)

    protected = protect_formulas and _NEEDS_PROTECTION.match(text) is not None
    if protected:
        text = "'" + text

    if protected or any(ch in text for ch in _SPECIAL_CHARS):
        return '"' + text.replace('"', '""') + '"'
    return text


def unprotect_csv_field(value: str) -> str:
    """Strip the single quote added by formula protection, if present."""
    if _PROTECTED.match(value):
        return value[1:]
    return value


def format_csv_row(values: Iterable[Any], protect_formulas: bool = True) -> str:
    """Join escaped fields into one CSV record (without line terminator)."""
    return ','.join(escape_csv_field(value, protect_formulas) for value in values)


def build_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Build a CSV document: header row, one row per record, '\\n' line endings."""
    lines = [','.join(header)]
    lines.extend(format_csv_row(row) for row in rows)
    return '\n'.join(lines) + '\n'


def split_csv_records(content: str) -> List[str]:
    """Split CSV text into raw records.

    A record ends at '\\n', '\\r\\n' or a lone '\\r' outside a quoted span.
    Whitespace-only records are dropped.
    """
    records = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(content)

    while i < length:
        char = content[i]
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char in '\r\n' and not in_quotes:
            record = ''.join(current)
            if record.strip():
                records.append(record)
            current = []
            if char == '\r' and i + 1 < length and content[i + 1] == '\n':
                i += 1
        else:
            current.append(char)
        i += 1

    record = ''.join(current)
    if record.strip():
        records.append(record)
    return records


def parse_csv_line(line: str, unprotect: bool = True) -> List[str]:
    """Parse one CSV record into its fields.

    Inside quotes a doubled quote is a literal quote and a lone quote closes
    the span; outside quotes a comma ends the field.

    Args:
        line: A single raw record (may contain newlines inside quotes)
        unprotect: Undo formula protection on each field

    Returns:
        List of field values
    """
    fields = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if in_quotes:
            if char == '"':
                if i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 2
                    continue
                in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ',':
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append(''.join(current))

    if unprotect:
        return [unprotect_csv_field(field) for field in fields]
    return fields


def parse_csv(content: str, unprotect: bool = True) -> List[List[str]]:
    """Parse a CSV document into a list of records (lists of field values)."""
    # Spreadsheet exports often start with a UTF-8 byte order mark
    content = content.lstrip('\ufeff')
    return [parse_csv_line(record, unprotect) for record in split_csv_records(content)]
