"""CSV reading strategies for the flat-file data sources.

Both strategies parse with the standard ``csv`` module, so quoted commas,
doubled quotes and newlines inside quoted fields are handled. They differ only
in how a row's cells are mapped onto a record:

* ``read_positional`` keeps rows as lists, callers index them by column
  position (used for the startups list).
* ``read_with_header`` maps each row onto the names found in the first line
  (used for the members list).
"""
import csv
import io
from typing import Dict, List, Optional, Tuple


def _rows(text: str) -> List[List[str]]:
    reader = csv.reader(io.StringIO(text.lstrip('\ufeff')))
    rows = []
    for row in reader:
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue
        rows.append(cells)
    return rows


def read_positional(text: str) -> List[Tuple[int, List[str]]]:
    """Parse CSV text into (row_index, values) pairs, skipping the header line.

    The row index counts data rows from 1 and is stable for a given file, so it
    doubles as the record id of positional sources.
    """
    rows = _rows(text)
    return [(index, values) for index, values in enumerate(rows[1:], start=1)]


def read_with_header(text: str) -> List[Dict[str, str]]:
    """Parse CSV text into dicts keyed by the header line's column names."""
    rows = _rows(text)
    if len(rows) < 2:
        return []

    headers = rows[0]
    records = []
    for values in rows[1:]:
        records.append({
            header: values[index] if index < len(values) else ''
            for index, header in enumerate(headers)
        })
    return records


def value_at(values: List[str], index: int) -> Optional[str]:
    """Get a cell by position, None for short rows or empty cells."""
    if index < len(values) and values[index]:
        return values[index]
    return None


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated cell into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]
