'''
Dashboard View Derivation

Purpose: Recompute everything the dashboard shows from raw data + config.

Responsibilities:
- Run normalize -> filter/sort -> paginate over the feed
- Build trend buckets and summary counts over the full normalized set
- Build pie chart slices for the selected type filter

Design notes:
- derive_view is the single entry point; call it whenever data or config
  changes instead of patching parts of a previous ViewState
'''

import random
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Dict, List, Optional

from ThreatFeed.Filter.filter_sort import apply
from ThreatFeed.Normalize.normalize import normalize_feed
from ThreatFeed.Paginate.paginator import paginate
from ThreatFeed.Trend.trend_aggregator import aggregate
from ThreatFeed.View.view_config import ViewConfig

__all__ = ["ViewState", "derive_view", "build_view", "summary_counts", "chart_data", "CHART_LABELS"]

SUMMARY_TYPES = ("ip", "subnet", "url")
CHART_LABELS = {"ip": "IPs", "subnet": "Subnets", "url": "URLs"}


@dataclass(frozen=True)
class ViewState:
	records: List[Dict[str, str]]
	filtered: List[Dict[str, str]]
	page: Dict[str, Any]
	trend: List[Dict[str, Any]]
	summary: Dict[str, int]
	chart: List[Dict[str, Any]]
	skipped: int = 0
	config: ViewConfig = field(default_factory=ViewConfig)


def summary_counts(records: List[Dict[str, str]]) -> Dict[str, int]:
	"""Count ip / subnet / url records, ignoring any active filter."""
	counts = {t: 0 for t in SUMMARY_TYPES}
	for record in records:
		ioc_type = record.get("type")
		if ioc_type in counts:
			counts[ioc_type] += 1
	return counts


def chart_data(summary: Dict[str, int], type_filter: str) -> List[Dict[str, Any]]:
	"""Pie chart slices: all three types, the one filtered type, or nothing."""
	if type_filter == "all":
		types = list(SUMMARY_TYPES)
	elif type_filter in CHART_LABELS:
		types = [type_filter]
	else:
		types = []
	return [{"name": CHART_LABELS[t], "value": summary.get(t, 0)} for t in types]


def build_view(
	records: List[Dict[str, str]],
	config: ViewConfig,
	rng: Optional[random.Random] = None,
	tz: Optional[tzinfo] = None,
	skipped: int = 0,
) -> ViewState:
	"""Derive a ViewState from an already-normalized working set."""
	filtered = apply(records, config)
	summary = summary_counts(records)
	return ViewState(
		records=list(records),
		filtered=filtered,
		page=paginate(filtered, config.page, config.page_size),
		trend=aggregate(records, rng=rng, tz=tz),
		summary=summary,
		chart=chart_data(summary, config.type_filter),
		skipped=skipped,
		config=config,
	)


def derive_view(
	raw: List[Dict[str, Any]],
	config: ViewConfig,
	rng: Optional[random.Random] = None,
	tz: Optional[tzinfo] = None,
) -> ViewState:
	"""
	Derive the full dashboard view from a raw feed payload.

	Malformed raw records are skipped and counted in ViewState.skipped.

	Args:
		raw: Raw feed records as fetched
		config: Current view configuration
		rng: Random source for trend jitter (fresh one per call if omitted)
		tz: Timezone for day buckets (local time if omitted)
	"""
	normalized = normalize_feed(raw)
	return build_view(normalized["records"], config, rng=rng, tz=tz, skipped=normalized["skipped"])
