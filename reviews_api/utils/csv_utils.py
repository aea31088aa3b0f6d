"""
CSV reading utilities for bulk imports
"""

import io
import json
from typing import Any, Dict, List

import pandas as pd


def try_parse_structured(value: Any) -> Any:
    """
    Decode a cell that looks like a JSON object.

    Strings whose trimmed form starts with ``{`` are handed to the JSON
    decoder; anything that fails to decode, and every other value, comes
    back unchanged. Never raises.
    """
    if not isinstance(value, str) or not value.strip().startswith("{"):
        return value
    try:
        return json.loads(value)
    except (ValueError, RecursionError):
        # Malformed, or nested deeper than the decoder can follow
        return value


class CsvReader:
    """CSV reading and parsing utilities"""

    @staticmethod
    def read_records(data: bytes) -> List[Dict[str, Any]]:
        """
        Parse CSV bytes into one mapping per row, keyed by the header row.

        Every cell is read as text and empty cells stay empty strings;
        type coercion is left to the record schemas. A UTF-8 byte order
        mark is tolerated.

        Raises:
            ValueError: If the bytes cannot be parsed as CSV
        """
        try:
            df = pd.read_csv(
                io.BytesIO(data),
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
            )
        except ValueError as e:
            # ParserError, EmptyDataError and UnicodeDecodeError all land here
            raise ValueError(f"Failed to read CSV file: {str(e)}") from e

        return [
            {str(column): try_parse_structured(cell) for column, cell in row.items()}
            for row in df.to_dict(orient="records")
        ]
