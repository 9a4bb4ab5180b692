'''
Filter-Sort Engine

Purpose: Produce the ordered IOC view the table, pagination and export read.

Responsibilities:
- Case-insensitive search over value and source
- Exact type filter ("all" matches everything)
- Stable sort by timestamp (latest / oldest) or by value (alpha, case-insensitive and collated by LC_COLLATE)

Design notes:
- Filtering always runs before sorting
- Unrecognized sort modes leave the filtered order untouched
- Unparseable timestamps sort as the smallest key, never raise
'''

import locale
import logging
from typing import Dict, List, Tuple

from ThreatFeed.Normalize.timestamps import timestamp_sort_key
from ThreatFeed.View.view_config import ViewConfig

__all__ = ["apply", "filter_records", "sort_records", "SORT_MODES"]

logger = logging.getLogger(__name__)

SORT_MODES = ("latest", "oldest", "alpha")


def _matches_search(record: Dict[str, str], needle: str) -> bool:
	return needle in record.get("value", "").lower() or needle in record.get("source", "").lower()


def filter_records(records: List[Dict[str, str]], search: str = "", type_filter: str = "all") -> List[Dict[str, str]]:
	"""Apply search and type filters; returns a new list."""
	result = list(records)
	if search:
		needle = search.lower()
		result = [r for r in result if _matches_search(r, needle)]
	if type_filter != "all":
		result = [r for r in result if r.get("type") == type_filter]
	return result


def _alpha_key(record: Dict[str, str]) -> Tuple[str, str]:
	# case is only a tie-break, even under the C locale
	value = record.get("value", "")
	return (locale.strxfrm(value.casefold()), locale.strxfrm(value))


def sort_records(records: List[Dict[str, str]], sort: str) -> List[Dict[str, str]]:
	"""Return records ordered by sort mode (stable)."""
	if sort == "latest":
		# reverse=True keeps ties in input order
		return sorted(records, key=lambda r: timestamp_sort_key(r.get("timestamp")), reverse=True)
	if sort == "oldest":
		return sorted(records, key=lambda r: timestamp_sort_key(r.get("timestamp")))
	if sort == "alpha":
		return sorted(records, key=_alpha_key)
	logger.debug("Unrecognized sort mode %r; keeping filtered order", sort)
	return list(records)


def apply(records: List[Dict[str, str]], config: ViewConfig) -> List[Dict[str, str]]:
	"""
	Filter then sort records according to a view configuration.

	Args:
		records: Normalized IOC records
		config: Current view configuration

	Returns:
		New ordered list; the input sequence is not modified
	"""
	filtered = filter_records(records, config.search, config.type_filter)
	return sort_records(filtered, config.sort)
