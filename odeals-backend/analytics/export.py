# analytics/export.py
"""
CSV export for partner statistics.
"""
import csv
from datetime import date, datetime
from io import StringIO
from typing import Any, Dict, List, Optional


def export_to_csv(rows: List[Dict[str, Any]], fieldnames: Optional[List[str]] = None) -> str:
    """
    Export a list of dictionaries to CSV format.

    Args:
        rows: List of dictionaries to export
        fieldnames: Optional list of field names (if not provided, uses keys from first row)

    Returns:
        CSV string (header only when rows is empty but fieldnames are given)
    """
    if not rows and not fieldnames:
        return ""

    output = StringIO()
    if fieldnames is None:
        fieldnames = list(rows[0].keys())

    writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()

    for row in rows:
        csv_row = {}
        for key, value in row.items():
            if isinstance(value, (date, datetime)):
                csv_row[key] = value.isoformat()
            elif value is None:
                csv_row[key] = ""
            else:
                csv_row[key] = value
        writer.writerow(csv_row)

    return output.getvalue()
