"""Fixed-size pagination over an ordered IOC view."""

import math
from typing import Any, Dict, Sequence

__all__ = ["paginate", "total_pages"]


def total_pages(count: int, page_size: int) -> int:
	"""Number of pages; always at least 1 so "Page 1 of 1" can be shown."""
	return max(1, math.ceil(count / page_size))


def paginate(records: Sequence[Any], page: int, page_size: int) -> Dict[str, Any]:
	"""
	Slice one page out of records.

	A page past the end yields an empty items list; clamping the requested
	page is the caller's job.

	Raises:
		ValueError: If page < 1 or page_size <= 0
	"""
	if isinstance(page, bool) or not isinstance(page, int) or page < 1:
		raise ValueError("page must be an integer >= 1")
	if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
		raise ValueError("page_size must be an integer > 0")

	start = (page - 1) * page_size
	return {
		"items": list(records[start:start + page_size]),
		"page": page,
		"total_pages": total_pages(len(records), page_size),
	}
