"""
Timestamp parsing shared by the sort and trend stages.

Feed timestamps are usually ISO-8601, but feeds also carry RFC-1123 and
slash-separated dates, so anything dateutil understands is accepted.
Parsing never raises: callers get None for anything unparseable and decide
their own fallback. Timestamps without an offset stay naive and are read as
local wall-clock time.
"""

from datetime import datetime
from typing import Any, Optional

from dateutil import parser as dtparser

__all__ = ["parse_timestamp", "timestamp_sort_key"]

def parse_timestamp(value: Any) -> Optional[datetime]:
	"""Parse a feed timestamp; returns a naive datetime when no offset is given."""
	if not isinstance(value, str) or not value.strip():
		return None
	text = value.strip()
	try:
		return dtparser.isoparse(text)
	except (ValueError, OverflowError):
		pass
	try:
		return dtparser.parse(text)
	except (ValueError, OverflowError):
		return None

def timestamp_sort_key(value: Any) -> float:
	"""POSIX seconds for sorting; unparseable timestamps sort as the smallest key."""
	parsed = parse_timestamp(value)
	if parsed is None:
		return float("-inf")
	try:
		# naive values are taken as local time here
		return parsed.timestamp()
	except (ValueError, OverflowError, OSError):
		return float("-inf")
