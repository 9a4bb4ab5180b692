"""
Dashboard Settings

Purpose: Load the dashboard configuration surface from YAML.

Responsibilities:
- Read config.yml (severity table, trend types, view options, refresh interval)
- Provide typed accessors with built-in fallbacks when a section is missing
- Expose a lazily loaded singleton for the pipeline stages

Design notes:
- Dark mode is UI-only and intentionally absent from this file
"""

import os
from typing import Any, Dict, List, Optional

import yaml

__all__ = [
	"DashboardConfigLoader",
	"get_config",
	"DEFAULT_SEVERITY_TABLE",
	"DEFAULT_SEVERITY",
	"AUTO_REFRESH_INTERVAL_SECONDS",
]

DEFAULT_SEVERITY_TABLE = {"ip": "High", "subnet": "Medium", "url": "Low"}
DEFAULT_SEVERITY = "Unknown"
DEFAULT_TREND_TYPES = ["ip", "subnet", "url"]
DEFAULT_JITTER = 0.15
DEFAULT_SORT_MODES = ["latest", "oldest", "alpha"]
DEFAULT_TYPE_FILTERS = ["all", "ip", "subnet", "url"]
DEFAULT_PAGE_SIZES = [5, 10, 20]
DEFAULT_PAGE_SIZE = 10
AUTO_REFRESH_INTERVAL_SECONDS = 10
DEFAULT_EXPORT_FILENAMES = {
	"csv": "ioc_feed.csv",
	"json": "ioc_feed.json",
	"summary": "ioc_summary.md",
}


class DashboardConfigLoader:
	"""Load dashboard configuration (severity table, trend and view options)."""

	def __init__(self, config_path: str) -> None:
		self._config_path = config_path
		self._config = self._load()

	def _load(self) -> Dict[str, Any]:
		if not os.path.isfile(self._config_path):
			raise FileNotFoundError(f"Dashboard config not found: {self._config_path}")
		with open(self._config_path, "r", encoding="utf-8") as f:
			data = yaml.safe_load(f) or {}
		if not isinstance(data, dict):
			raise ValueError(f"Dashboard config must be a mapping: {self._config_path}")
		return data

	def _section(self, name: str) -> Dict[str, Any]:
		section = self._config.get(name, {}) or {}
		return section if isinstance(section, dict) else {}

	@property
	def config_path(self) -> str:
		return self._config_path

	@property
	def severity_table(self) -> Dict[str, str]:
		table = self._section("severity").get("table")
		if not isinstance(table, dict) or not table:
			return dict(DEFAULT_SEVERITY_TABLE)
		return {str(k): str(v) for k, v in table.items()}

	@property
	def default_severity(self) -> str:
		return str(self._section("severity").get("default", DEFAULT_SEVERITY))

	@property
	def trend_types(self) -> List[str]:
		types = self._section("trend").get("types")
		if not isinstance(types, list) or not types:
			return list(DEFAULT_TREND_TYPES)
		return [str(t) for t in types]

	@property
	def jitter(self) -> float:
		value = self._section("trend").get("jitter", DEFAULT_JITTER)
		if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
			raise ValueError("trend.jitter must be a non-negative number")
		return float(value)

	@property
	def sort_modes(self) -> List[str]:
		modes = self._section("view").get("sort_modes")
		return [str(m) for m in modes] if isinstance(modes, list) and modes else list(DEFAULT_SORT_MODES)

	@property
	def type_filters(self) -> List[str]:
		filters = self._section("view").get("type_filters")
		return [str(f) for f in filters] if isinstance(filters, list) and filters else list(DEFAULT_TYPE_FILTERS)

	@property
	def page_sizes(self) -> List[int]:
		sizes = self._section("view").get("page_sizes")
		if not isinstance(sizes, list) or not sizes:
			return list(DEFAULT_PAGE_SIZES)
		return [int(s) for s in sizes]

	@property
	def default_page_size(self) -> int:
		return int(self._section("view").get("default_page_size", DEFAULT_PAGE_SIZE))

	@property
	def default_sort(self) -> str:
		return str(self._section("view").get("default_sort", "latest"))

	@property
	def refresh_interval(self) -> int:
		"""Auto-refresh interval in seconds."""
		return int(self._section("refresh").get("interval_seconds", AUTO_REFRESH_INTERVAL_SECONDS))

	@property
	def export_filenames(self) -> Dict[str, str]:
		names = dict(DEFAULT_EXPORT_FILENAMES)
		for key, value in self._section("export").items():
			if key in names and isinstance(value, str) and value.strip():
				names[key] = value.strip()
		return names


def _build_config_path() -> str:
	"""Build path to the bundled config.yml."""
	settings_dir = os.path.dirname(__file__)
	return os.path.join(settings_dir, "config.yml")


_CONFIG_LOADER: Optional[DashboardConfigLoader] = None


def get_config() -> DashboardConfigLoader:
	"""Lazy-load the DashboardConfigLoader singleton."""
	global _CONFIG_LOADER
	if _CONFIG_LOADER is None:
		_CONFIG_LOADER = DashboardConfigLoader(_build_config_path())
	return _CONFIG_LOADER
