'''
IOC Normalization

Purpose: Turn a raw feed payload into the deduplicated working set.

Responsibilities:
- Validate the minimal record structure (value, type)
- Deduplicate on value: last-seen record wins, first-seen position is kept
- Attach a severity label derived solely from the IOC type

Why important:
- Every downstream view (table, trend, export) reads the normalized set
- Dedup order decides the order of trend buckets
'''

import logging
from typing import Any, Dict, Iterable, List, Optional

from ThreatFeed.Settings.settings import get_config

__all__ = ["normalize", "normalize_feed", "get_severity", "ValidationError"]

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
	"""Raised when a raw IOC record violates the minimal record contract."""


def get_severity(ioc_type: Any, table: Optional[Dict[str, str]] = None, default: Optional[str] = None) -> str:
	"""
	Map an IOC type to its severity label.

	Unknown types map to the default label, never an error.
	"""
	if table is None:
		config = get_config()
		table = config.severity_table
		if default is None:
			default = config.default_severity
	if default is None:
		default = "Unknown"
	if not isinstance(ioc_type, str):
		return default
	return table.get(ioc_type, default)


def _validate_raw_record(record: Any, index: int) -> None:
	"""Strictly validate the fields the pipeline cannot work without."""
	if not isinstance(record, dict):
		raise ValidationError(f"record[{index}] must be a dictionary")

	for field in ("value", "type"):
		if field not in record:
			raise ValidationError(f"record[{index}] missing required field: '{field}'")
		if not isinstance(record[field], str) or not record[field].strip():
			raise ValidationError(f"record[{index}]['{field}'] must be a non-empty string")


def _as_text(value: Any) -> str:
	# null optional fields become empty, not the text "None"
	if value is None:
		return ""
	return value if isinstance(value, str) else str(value)


def _build_record(raw: Dict[str, Any], table: Dict[str, str], default: str) -> Dict[str, str]:
	"""Project a raw record onto the IOC shape; extra fields are dropped."""
	source = raw.get("source", "")
	timestamp = raw.get("timestamp", "")
	return {
		"value": raw["value"],
		"type": raw["type"],
		"source": _as_text(source),
		"timestamp": _as_text(timestamp),
		"severity": get_severity(raw["type"], table, default),
	}


def _dedupe(records: Iterable[Dict[str, str]]) -> List[Dict[str, str]]:
	# dict keeps first insertion position while assignment overwrites content
	by_value: Dict[str, Dict[str, str]] = {}
	for record in records:
		by_value[record["value"]] = record
	return list(by_value.values())


def normalize(raw: List[Dict[str, Any]]) -> List[Dict[str, str]]:
	"""
	Normalize a raw IOC feed.

	Args:
		raw: Sequence of raw IOC dictionaries in feed order

	Returns:
		New list of IOC records (value, type, source, timestamp, severity)

	Raises:
		ValidationError: If any record is not a dict or lacks value/type
	"""
	if not isinstance(raw, (list, tuple)):
		raise ValidationError("raw feed must be a list of records")

	config = get_config()
	table = config.severity_table
	default = config.default_severity

	built = []
	for index, record in enumerate(raw):
		_validate_raw_record(record, index)
		built.append(_build_record(record, table, default))

	return _dedupe(built)


def normalize_feed(raw: List[Dict[str, Any]]) -> Dict[str, Any]:
	"""
	Normalize a raw feed, skipping malformed records instead of aborting.

	Returns:
		{"records": [...], "skipped": <number of dropped records>}
	"""
	if not isinstance(raw, (list, tuple)):
		raise ValidationError("raw feed must be a list of records")

	config = get_config()
	table = config.severity_table
	default = config.default_severity

	built = []
	skipped = 0
	for index, record in enumerate(raw):
		try:
			_validate_raw_record(record, index)
		except ValidationError as e:
			skipped += 1
			logger.warning("Skipping malformed IOC record: %s", e)
			continue
		built.append(_build_record(record, table, default))

	records = _dedupe(built)
	logger.debug("Normalized %d raw records into %d IOCs (%d skipped)", len(raw), len(records), skipped)
	return {"records": records, "skipped": skipped}
