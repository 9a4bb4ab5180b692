'''
Trend Aggregator

Purpose: Build the per-day series behind the IOC trend chart.

Responsibilities:
- Bucket records by local calendar date, counting ip / subnet / url
- Mark each bucket up / down / flat against the previous bucket
- Add "zig-zag" jitter so overlapping integer series stay visible

Design notes:
- Buckets keep first-appearance order of dates; they are not re-sorted
- Types outside the trend set are not counted (they still get an Unknown
  severity in the table)
- Jittered values are display-only and differ on every call
'''

import logging
import random
from datetime import tzinfo
from typing import Any, Dict, List, Optional, Sequence

from ThreatFeed.Normalize.timestamps import parse_timestamp
from ThreatFeed.Settings.settings import get_config

__all__ = ["TrendAggregator", "aggregate", "trend_marker", "TREND_GLYPHS"]

logger = logging.getLogger(__name__)

TREND_GLYPHS = {"up": "🔼", "down": "🔽", "flat": "—", "none": "—"}


def trend_marker(current: int, previous: Optional[int]) -> str:
	"""Compare a count with the previous bucket's count."""
	if previous is None:
		return "none"
	if current > previous:
		return "up"
	if current < previous:
		return "down"
	return "flat"


class TrendAggregator:
	"""Aggregate IOC records into ordered day buckets."""

	def __init__(
		self,
		types: Sequence[str],
		jitter: float = 0.15,
		rng: Optional[random.Random] = None,
		tz: Optional[tzinfo] = None,
	) -> None:
		self._types = list(types)
		self._jitter = jitter
		self._rng = rng if rng is not None else random.Random()
		self._tz = tz

	def _bucket_date(self, timestamp: Any) -> Optional[str]:
		parsed = parse_timestamp(timestamp)
		if parsed is None:
			return None
		if parsed.tzinfo is None:
			# no offset: already local wall-clock time
			return parsed.date().isoformat()
		# astimezone(None) converts to the local timezone
		return parsed.astimezone(self._tz).date().isoformat()

	def _count(self, records: List[Dict[str, str]]) -> List[Dict[str, Any]]:
		buckets: Dict[str, Dict[str, int]] = {}
		for record in records:
			date = self._bucket_date(record.get("timestamp"))
			if date is None:
				logger.warning(
					"Excluding IOC %r from trend: unparseable timestamp %r",
					record.get("value"), record.get("timestamp"),
				)
				continue
			counts = buckets.setdefault(date, {t: 0 for t in self._types})
			ioc_type = record.get("type")
			if ioc_type in counts:
				counts[ioc_type] += 1
			else:
				logger.debug("Type %r is not tracked in trend counts", ioc_type)
		return [{"date": date, "counts": counts} for date, counts in buckets.items()]

	def aggregate(self, records: List[Dict[str, str]]) -> List[Dict[str, Any]]:
		"""
		Build day buckets with counts, trend markers and jittered counts.

		Returns:
			List of {"date", "counts", "trend_markers", "jittered_counts"}
		"""
		result = []
		previous: Optional[Dict[str, int]] = None
		for bucket in self._count(records):
			counts = bucket["counts"]
			markers = {
				t: trend_marker(counts[t], previous[t] if previous is not None else None)
				for t in self._types
			}
			jittered = {
				t: counts[t] + self._rng.uniform(-self._jitter, self._jitter)
				for t in self._types
			}
			result.append({
				"date": bucket["date"],
				"counts": dict(counts),
				"trend_markers": markers,
				"jittered_counts": jittered,
			})
			previous = counts
		return result


def aggregate(
	records: List[Dict[str, str]],
	rng: Optional[random.Random] = None,
	tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
	"""Aggregate records using the configured trend types and jitter."""
	config = get_config()
	aggregator = TrendAggregator(config.trend_types, config.jitter, rng=rng, tz=tz)
	return aggregator.aggregate(records)
