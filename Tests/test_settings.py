"""
Unit Tests for ThreatFeed/Settings/settings.py

Tests YAML loading, typed accessors and built-in fallbacks.
"""

import pytest
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ThreatFeed.Settings.settings import (
    DashboardConfigLoader,
    get_config,
    AUTO_REFRESH_INTERVAL_SECONDS,
    DEFAULT_SEVERITY_TABLE,
)


class TestDashboardConfigLoader:
    """Test suite for DashboardConfigLoader class."""

    def test_missing_file_raises_error(self):
        """Test that a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Dashboard config not found"):
            DashboardConfigLoader("/nonexistent/config.yml")

    def test_non_mapping_config_raises_error(self, tmp_path):
        """Test that a YAML list at top level is rejected."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            DashboardConfigLoader(str(config_file))

    def test_empty_config_uses_fallbacks(self, tmp_path):
        """Test that an empty file falls back to built-in defaults."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("")

        loader = DashboardConfigLoader(str(config_file))

        assert loader.severity_table == DEFAULT_SEVERITY_TABLE
        assert loader.default_severity == "Unknown"
        assert loader.trend_types == ["ip", "subnet", "url"]
        assert loader.jitter == 0.15
        assert loader.sort_modes == ["latest", "oldest", "alpha"]
        assert loader.type_filters == ["all", "ip", "subnet", "url"]
        assert loader.page_sizes == [5, 10, 20]
        assert loader.default_page_size == 10
        assert loader.default_sort == "latest"
        assert loader.refresh_interval == AUTO_REFRESH_INTERVAL_SECONDS
        assert loader.export_filenames["csv"] == "ioc_feed.csv"
        assert loader.export_filenames["json"] == "ioc_feed.json"

    def test_custom_values_are_read(self, tmp_path):
        """Test that configured values override defaults."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("""
severity:
  table:
    ip: Critical
  default: None
trend:
  jitter: 0.05
view:
  page_sizes: [25, 50]
refresh:
  interval_seconds: 30
export:
  csv: custom.csv
""")

        loader = DashboardConfigLoader(str(config_file))

        assert loader.severity_table == {"ip": "Critical"}
        assert loader.default_severity == "None"
        assert loader.jitter == 0.05
        assert loader.page_sizes == [25, 50]
        assert loader.refresh_interval == 30
        assert loader.export_filenames["csv"] == "custom.csv"
        assert loader.export_filenames["json"] == "ioc_feed.json"

    def test_negative_jitter_raises_error(self, tmp_path):
        """Test that a negative jitter amplitude is rejected."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("trend:\n  jitter: -1\n")

        loader = DashboardConfigLoader(str(config_file))
        with pytest.raises(ValueError, match="trend.jitter"):
            loader.jitter


class TestBundledConfig:
    """Test suite for the config.yml shipped with the package."""

    def test_get_config_is_singleton(self):
        """Test that get_config returns the same loader each time."""
        assert get_config() is get_config()

    def test_bundled_config_values(self):
        """Test the bundled dashboard configuration surface."""
        config = get_config()

        assert config.severity_table == {"ip": "High", "subnet": "Medium", "url": "Low"}
        assert config.page_sizes == [5, 10, 20]
        assert config.refresh_interval == 10
        assert config.default_sort == "latest"
