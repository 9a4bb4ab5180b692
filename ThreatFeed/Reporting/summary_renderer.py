"""
Markdown Summary Renderer

Purpose: Generate a human-readable Markdown snapshot of the dashboard.

Responsibilities:
- Transform a ViewState into template-friendly context
- Load and render the Jinja2 template
- Write the summary next to the CSV/JSON exports

Design notes:
- Trend rows use the true counts; jittered values are chart-only
- Falls back to an inline template if the template file is missing
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from ThreatFeed.Settings.settings import get_config
from ThreatFeed.Trend.trend_aggregator import TREND_GLYPHS
from ThreatFeed.View.view import CHART_LABELS, ViewState

__all__ = ["SummaryDataTransformer", "MarkdownTemplateLoader", "render_summary", "write_summary"]

logger = logging.getLogger(__name__)

TEMPLATE_FILE = "feed_summary.md.j2"


class SummaryDataTransformer:
	"""Transform a ViewState into template-ready format."""

	def __init__(self, state: ViewState) -> None:
		self._state = state

	def transform_summary(self) -> List[Dict[str, Any]]:
		return [
			{"name": label, "value": self._state.summary.get(ioc_type, 0)}
			for ioc_type, label in CHART_LABELS.items()
		]

	def transform_trend(self) -> List[Dict[str, Any]]:
		"""Flatten day buckets into table rows with marker glyphs."""
		rows = []
		for bucket in self._state.trend:
			row: Dict[str, Any] = {"date": bucket["date"]}
			for ioc_type, count in bucket["counts"].items():
				row[ioc_type] = count
				row[f"{ioc_type}_trend"] = TREND_GLYPHS.get(bucket["trend_markers"].get(ioc_type, "none"), "")
			rows.append(row)
		return rows

	def transform_view(self) -> Dict[str, Any]:
		config = self._state.config
		return {
			"search": config.search,
			"type_filter": config.type_filter,
			"sort": config.sort,
			"matching": len(self._state.filtered),
		}

	def transform(self) -> Dict[str, Any]:
		"""Return all template variables."""
		return {
			"summary": self.transform_summary(),
			"total": len(self._state.records),
			"skipped": self._state.skipped,
			"trend": self.transform_trend(),
			"view": self.transform_view(),
			"page": self._state.page,
			"generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
		}


class MarkdownTemplateLoader:
	"""Load the Jinja2 template for the Markdown summary."""

	def __init__(self, template_dir: Optional[str] = None) -> None:
		self._template_dir = template_dir or os.path.join(os.path.dirname(__file__), "templates")

	def _create_inline_fallback(self) -> str:
		return """# ThreatFeed Summary

Generated: {{ generated_at }}

{% for slice in summary %}
- {{ slice.name }}: {{ slice.value }}
{% endfor %}

{% for row in trend %}
- {{ row.date }}: ip={{ row.ip }} subnet={{ row.subnet }} url={{ row.url }}
{% endfor %}

Page {{ page.page }} of {{ page.total_pages }}
{% for ioc in page["items"] %}
- {{ ioc.value }} ({{ ioc.type }}, {{ ioc.severity }}) from {{ ioc.source }}
{% endfor %}
"""

	def load_template(self) -> Template:
		env = Environment(
			loader=FileSystemLoader(self._template_dir),
			autoescape=select_autoescape(["html", "xml"]),
			trim_blocks=True,
			lstrip_blocks=True,
		)
		try:
			return env.get_template(TEMPLATE_FILE)
		except TemplateNotFound:
			logger.warning("Template %s not found in %s; using inline template", TEMPLATE_FILE, self._template_dir)
			return env.from_string(self._create_inline_fallback())


def render_summary(state: ViewState, template_dir: Optional[str] = None) -> str:
	"""Render the Markdown summary for a ViewState."""
	context = SummaryDataTransformer(state).transform()
	template = MarkdownTemplateLoader(template_dir).load_template()
	return template.render(**context)


def write_summary(state: ViewState, output_dir: str) -> str:
	"""
	Render and write the Markdown summary.

	Returns:
		Path of the written file

	Raises:
		OSError: If the file cannot be written
	"""
	os.makedirs(output_dir, exist_ok=True)
	file_path = os.path.join(output_dir, get_config().export_filenames["summary"])
	with open(file_path, "w", encoding="utf-8") as f:
		f.write(render_summary(state))
	logger.info("Wrote summary to %s", file_path)
	return file_path
