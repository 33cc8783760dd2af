"""
CSV tokenizer.

An explicit character-scan state machine rather than the csv module:
real exports carry stray quotes and ragged rows, and the scanner must
never raise on them.
"""

from __future__ import annotations

from typing import List

Row = List[str]


def _has_content(row: Row) -> bool:
    return any(field.strip() for field in row)


def parse_rows(text: str) -> List[Row]:
    """
    Split CSV text into rows of raw string fields.

    Rules:
    - `"` opens a quoted section; inside it `""` is a literal quote and a
      lone `"` closes it. Commas and line breaks inside quotes are content.
    - Unquoted `,` ends a field; `\\n`, `\\r` or `\\r\\n` ends a row.
    - Rows whose fields are all blank are dropped.
    - Pending content at end of input is flushed like a final line break.
    """
    rows: List[Row] = []
    row: Row = []
    field: List[str] = []
    in_quotes = False

    def end_row() -> None:
        nonlocal row, field
        row.append("".join(field))
        if _has_content(row):
            rows.append(row)
        row = []
        field = []

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and text[i + 1] == '"':
                    field.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(ch)
        elif ch == '"':
            in_quotes = True
        elif ch == ",":
            row.append("".join(field))
            field = []
        elif ch == "\r" or ch == "\n":
            end_row()
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
        else:
            field.append(ch)
        i += 1

    if row or field:
        end_row()

    return rows
