"""
Feed Session

Purpose: Hold the in-memory working set between refreshes.

Responsibilities:
- Replace the working set wholesale on each successful refresh
- Keep the previous working set when a fetch fails
- Surface a single user-visible error message for the last failure

Design notes:
- The fetch callable is owned by the caller (HTTP client, file loader, ...)
- No retry or backoff here; the next refresh is the retry
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional

from ThreatFeed.Normalize.normalize import normalize_feed
from ThreatFeed.Settings.settings import AUTO_REFRESH_INTERVAL_SECONDS
from ThreatFeed.View.view import ViewState, build_view
from ThreatFeed.View.view_config import ViewConfig

__all__ = ["FeedSession", "FETCH_ERROR_MESSAGE", "AUTO_REFRESH_INTERVAL_SECONDS"]

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch IOCs"


class FeedSession:
	"""Manage the working set of normalized IOCs for one dashboard session."""

	def __init__(self) -> None:
		self._records: List[Dict[str, str]] = []
		self._error: Optional[str] = None
		self._skipped = 0
		self._last_refreshed: Optional[str] = None

	@property
	def records(self) -> List[Dict[str, str]]:
		return list(self._records)

	@property
	def error(self) -> Optional[str]:
		return self._error

	@property
	def skipped(self) -> int:
		return self._skipped

	@property
	def last_refreshed(self) -> Optional[str]:
		return self._last_refreshed

	def refresh(self, fetch: Callable[[], List[Dict[str, Any]]]) -> bool:
		"""
		Fetch and normalize a new feed payload.

		Returns:
			True if the working set was replaced, False if the fetch failed
		"""
		self._error = None
		try:
			raw = fetch()
			normalized = normalize_feed(raw)
		except (OSError, ValueError) as e:
			self._error = f"{FETCH_ERROR_MESSAGE}: {e}"
			logger.warning("%s; keeping %d previous IOCs", self._error, len(self._records))
			return False

		self._records = normalized["records"]
		self._skipped = normalized["skipped"]
		self._last_refreshed = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
		logger.info("Working set refreshed: %d IOCs (%d skipped)", len(self._records), self._skipped)
		return True

	def view(
		self,
		config: ViewConfig,
		rng: Optional[random.Random] = None,
		tz: Optional[tzinfo] = None,
	) -> ViewState:
		"""Derive the dashboard view over the current working set."""
		return build_view(self._records, config, rng=rng, tz=tz, skipped=self._skipped)
