"""Quote-aware delimited text parser for legacy CSV exports.

Records may span several physical lines when a quoted field holds a
newline, so parsing runs in two phases: physical lines are assembled into
logical rows by tracking quote parity, then each logical row is split into
fields. The parser never raises; malformed quoting yields a best-effort row.
"""

from __future__ import annotations

from core.types import RawRow

_QUOTE = '"'
_DELIMITER = ","


def parse_delimited_text(text: str) -> list[RawRow]:
    """Parse CSV text into header-keyed rows.

    Args:
        text: Raw file content; the first logical row is the header.

    Returns:
        Ordered rows mapping each header to its string value. Missing
        trailing fields are empty strings; blank rows are skipped.
    """
    logical_rows = assemble_logical_rows(text.replace("\r\n", "\n").split("\n"))
    if not logical_rows:
        return []
    headers = split_fields(logical_rows[0])
    rows: list[RawRow] = []
    for logical_row in logical_rows[1:]:
        stripped = logical_row.strip()
        if not stripped:
            continue
        fields = split_fields(stripped)
        rows.append(
            {header: fields[index] if index < len(fields) else "" for index, header in enumerate(headers)}
        )
    return rows


def assemble_logical_rows(lines: list[str]) -> list[str]:
    """Join physical lines into logical rows.

    A line with an odd number of quote characters toggles between the
    outside-quote and inside-quote states. Inside a quote, lines are
    appended with their newline restored. A buffer still open at end of
    input is flushed as a final row.
    """
    rows: list[str] = []
    buffer = ""
    inside_quote = False
    for line in lines:
        odd_quotes = line.count(_QUOTE) % 2 == 1
        if inside_quote:
            buffer += "\n" + line
            if odd_quotes:
                inside_quote = False
                rows.append(buffer)
                buffer = ""
        elif odd_quotes:
            inside_quote = True
            buffer = line
        else:
            rows.append(line)
    if buffer:
        rows.append(buffer)
    return rows


def split_fields(row: str) -> list[str]:
    """Split one logical row into trimmed fields.

    A doubled quote inside a quoted field is unescaped to one quote; a
    delimiter only ends a field outside quotes.
    """
    fields: list[str] = []
    current: list[str] = []
    inside_quote = False
    index = 0
    while index < len(row):
        char = row[index]
        if inside_quote:
            if char == _QUOTE and row[index + 1 : index + 2] == _QUOTE:
                current.append(_QUOTE)
                index += 1
            elif char == _QUOTE:
                inside_quote = False
            else:
                current.append(char)
        elif char == _QUOTE:
            inside_quote = True
        elif char == _DELIMITER:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current).strip())
    return fields
