"""
IOC Feed Exporter

Purpose: Serialize the current filtered/sorted view to CSV and JSON.

Responsibilities:
- Build CSV text with a fixed column order
- Build pretty-printed JSON of the exact record sequence
- Write ioc_feed.csv / ioc_feed.json to an output directory

Design notes:
- to_csv / to_json are pure; only write_exports touches the filesystem
- CSV fields are joined with commas and are NOT quoted or escaped. A value
  containing a comma, quote or newline corrupts its row. Known limitation.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from ThreatFeed.Settings.settings import get_config

__all__ = ["to_csv", "to_json", "write_exports", "CSV_HEADERS", "CSV_FIELDS"]

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Value", "Type", "Source", "Timestamp", "Severity"]
CSV_FIELDS = ["value", "type", "source", "timestamp", "severity"]


def _row(record: Dict[str, Any]) -> List[str]:
	"""Extract CSV cells in column order; missing fields become empty cells."""
	row = []
	for field in CSV_FIELDS:
		cell = record.get(field, "")
		row.append("" if cell is None else str(cell))
	return row


def to_csv(records: List[Dict[str, Any]]) -> str:
	"""Render records as CSV text (header row first, no trailing newline)."""
	lines = [",".join(CSV_HEADERS)]
	for record in records:
		lines.append(",".join(_row(record)))
	return "\n".join(lines)


def to_json(records: List[Dict[str, Any]]) -> str:
	"""Render records as an indented JSON array, severity included."""
	return json.dumps(list(records), indent=2, ensure_ascii=False)


def write_exports(records: List[Dict[str, Any]], output_dir: str, filenames: Optional[Dict[str, str]] = None) -> Dict[str, str]:
	"""
	Write CSV and JSON exports of the given view.

	Args:
		records: The filtered/sorted view (not the unfiltered working set)
		output_dir: Directory to write into (created if missing)
		filenames: Optional {"csv": ..., "json": ...} override

	Returns:
		{"csv": <path>, "json": <path>}

	Raises:
		OSError: If the directory or files cannot be written
	"""
	names = filenames or get_config().export_filenames
	os.makedirs(output_dir, exist_ok=True)

	paths = {
		"csv": os.path.join(output_dir, names["csv"]),
		"json": os.path.join(output_dir, names["json"]),
	}

	with open(paths["csv"], "w", encoding="utf-8", newline="") as f:
		f.write(to_csv(records))

	with open(paths["json"], "w", encoding="utf-8") as f:
		f.write(to_json(records))

	logger.info("Exported %d IOCs to %s and %s", len(records), paths["csv"], paths["json"])
	return paths
