"""
Reading the monthly alert CSV and flattening it into table rows.

The table always has the same five columns, whatever the file contains, so a
file with a missing column simply shows empty cells.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

MONTH_COLUMN = "Mese"
SEVERITY1_COLUMN = "Severity 1 case"
CRITICAL_COLUMN = "ProM Critical Alert"
WARNING_COLUMN = "ProM Warning Alert"
OUTAGE_COLUMN = "System Outage"

CSV_HEADERS = [
    MONTH_COLUMN,
    SEVERITY1_COLUMN,
    CRITICAL_COLUMN,
    WARNING_COLUMN,
    OUTAGE_COLUMN,
]

# Which config weight applies to which CSV column.
WEIGHT_COLUMNS = {
    "severity1": SEVERITY1_COLUMN,
    "critical": CRITICAL_COLUMN,
    "warning": WARNING_COLUMN,
    "outage": OUTAGE_COLUMN,
}

SAMPLE_TOTALS = [10, 8, 12, 9, 11, 7, 6, 5, 9, 10, 8, 7]


def parse_csv(source) -> list[dict[str, str]]:
    """
    Parse a CSV (path or file-like) into a list of row dicts.

    First row is the header and blank lines are skipped. Every value is
    kept as a string; empty cells become "" rather than NaN.
    """
    df = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    # Excel likes to prepend a BOM to the first header.
    df.columns = [str(col).strip().lstrip("\ufeff") for col in df.columns]
    rows = df.to_dict(orient="records")
    logger.info("Parsed %d CSV row(s) with columns %s", len(rows), list(df.columns))
    return rows


def _cell(row: Mapping[str, Any], header: str) -> str:
    value = row.get(header)
    if value is None:
        return ""
    # pandas can still hand back NaN for odd inputs.
    if isinstance(value, float) and value != value:
        return ""
    return str(value)


def table_rows(rows: Iterable[Mapping[str, Any]]) -> list[list[str]]:
    """One list of five strings per CSV row, in `CSV_HEADERS` order."""
    return [[_cell(row, header) for header in CSV_HEADERS] for row in rows]


def _as_number(value: Any) -> float:
    """Numeric cell value; blanks, text, "nan" and "inf" all count as 0."""
    try:
        number = float(str(value).replace(",", "."))
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def resolve_weights(config: Mapping[str, Any] | None) -> dict[str, float]:
    """Pull the four weights out of a stored config, accepting the old `s1` key."""
    config = config or {}
    severity = config.get("severity1", config.get("s1", 0))
    return {
        "severity1": _as_number(severity),
        "critical": _as_number(config.get("critical", 0)),
        "warning": _as_number(config.get("warning", 0)),
        "outage": _as_number(config.get("outage", 0)),
    }


def weighted_totals(rows: Iterable[Mapping[str, Any]], config: Mapping[str, Any] | None) -> list[float]:
    """Per-month total: sum of each alert count times its weight."""
    weights = resolve_weights(config)
    totals = []
    for row in rows:
        total = sum(
            _as_number(row.get(column, "")) * weights[field]
            for field, column in WEIGHT_COLUMNS.items()
        )
        totals.append(total)
    return totals
