"""Delimited-text export of row sets."""

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class CsvExporter:
    """Writes rows to CSV text; holds no business logic."""

    def __init__(self, delimiter: str = ",") -> None:
        self.delimiter = delimiter

    def export(
        self,
        rows: Iterable[Mapping[str, Any]],
        columns: Sequence[tuple[str, str]],
    ) -> str:
        """
        Render rows as CSV.

        Args:
            rows: Mappings from field name to value
            columns: (field name, header) pairs in output order

        Returns:
            CSV text with a header line
        """
        output = io.StringIO()
        writer = csv.writer(output, delimiter=self.delimiter, lineterminator="\n")
        writer.writerow([header for _, header in columns])
        for row in rows:
            writer.writerow([_cell(row.get(field)) for field, _ in columns])
        return output.getvalue()
