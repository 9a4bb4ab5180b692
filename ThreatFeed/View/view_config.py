"""
View configuration passed by value into the pipeline.

The dashboard owns search text, type filter, sort mode and pagination as
UI state. Here that state is a frozen value: every change produces a new
ViewConfig, and changing what is shown resets pagination to page 1.
"""

from dataclasses import dataclass, replace
from typing import Any

__all__ = ["ViewConfig"]

# Changing any of these invalidates the current page
_PAGE_RESET_FIELDS = {"search", "type_filter", "sort", "page_size"}


@dataclass(frozen=True)
class ViewConfig:
	search: str = ""
	type_filter: str = "all"
	sort: str = "latest"
	page: int = 1
	page_size: int = 10

	def with_changes(self, **changes: Any) -> "ViewConfig":
		"""Return a copy with changes applied; filter/sort changes go back to page 1."""
		resets = any(
			key in _PAGE_RESET_FIELDS and getattr(self, key) != value
			for key, value in changes.items()
		)
		if resets and "page" not in changes:
			changes["page"] = 1
		return replace(self, **changes)

	def reset_page(self) -> "ViewConfig":
		return replace(self, page=1)
