"""
Pytest Configuration and Shared Fixtures

Provides reusable test fixtures for all test modules:
- Raw feeds and normalized IOC records
- Deterministic random sources for trend jitter
- Temporary feed files
"""

import pytest
import os
import sys
import json
from typing import Dict, Any, List

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Feed Fixtures
# ============================================================================

@pytest.fixture
def scenario_raw_feed() -> List[Dict[str, Any]]:
    """Raw feed with a duplicated IP value (source B should win)."""
    return [
        {"value": "1.2.3.4", "type": "ip", "source": "A", "timestamp": "2024-01-01T00:00:00Z"},
        {"value": "1.2.3.4", "type": "ip", "source": "B", "timestamp": "2024-01-02T00:00:00Z"},
        {"value": "evil.com", "type": "url", "source": "C", "timestamp": "2024-01-01T00:00:00Z"},
    ]


@pytest.fixture
def mixed_raw_feed() -> List[Dict[str, Any]]:
    """Raw feed covering every type, two days and an extra field."""
    return [
        {"value": "10.0.0.1", "type": "ip", "source": "AbuseIPDB", "timestamp": "2024-02-02T12:00:00Z", "confidence": 90},
        {"value": "10.0.0.0/24", "type": "subnet", "source": "Spamhaus", "timestamp": "2024-02-01T12:00:00Z"},
        {"value": "http://bad.example.net/login", "type": "url", "source": "PhishTank", "timestamp": "2024-02-02T08:00:00Z"},
        {"value": "44d88612fea8a8f36de82e1278abb02f", "type": "md5", "source": "MalwareBazaar", "timestamp": "2024-02-01T09:00:00Z"},
        {"value": "10.0.0.2", "type": "ip", "source": "Feodo", "timestamp": "2024-02-01T10:00:00Z"},
    ]


@pytest.fixture
def normalized_records() -> List[Dict[str, str]]:
    """Already-normalized IOC records in working-set order."""
    return [
        {"value": "charlie.example", "type": "url", "source": "URLhaus", "timestamp": "2024-03-02T10:00:00Z", "severity": "Low"},
        {"value": "10.1.1.1", "type": "ip", "source": "AbuseIPDB", "timestamp": "2024-03-03T10:00:00Z", "severity": "High"},
        {"value": "10.2.0.0/16", "type": "subnet", "source": "Spamhaus", "timestamp": "2024-03-01T10:00:00Z", "severity": "Medium"},
        {"value": "alpha.example", "type": "url", "source": "abuse.ch", "timestamp": "2024-03-04T10:00:00Z", "severity": "Low"},
        {"value": "10.3.3.3", "type": "ip", "source": "OTX", "timestamp": "2024-03-02T10:00:00Z", "severity": "High"},
    ]


@pytest.fixture
def make_records():
    """Factory: build IOC records from (value, type, timestamp) tuples."""
    def _make(rows, source="test-feed"):
        severities = {"ip": "High", "subnet": "Medium", "url": "Low"}
        return [
            {
                "value": value,
                "type": ioc_type,
                "source": source,
                "timestamp": timestamp,
                "severity": severities.get(ioc_type, "Unknown"),
            }
            for value, ioc_type, timestamp in rows
        ]
    return _make


# ============================================================================
# Random Source Fixtures
# ============================================================================

class FixedRandom:
    """Stand-in random source: uniform() always returns the same offset."""

    def __init__(self, offset: float) -> None:
        self.offset = offset
        self.calls = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        return self.offset


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom instances."""
    return FixedRandom


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def create_temp_feed_file(tmp_path):
    """Factory: write a feed payload to a temporary JSON file."""
    def _create(payload: Any, filename: str = "iocs.json") -> str:
        file_path = tmp_path / filename
        file_path.write_text(json.dumps(payload), encoding="utf-8")
        return str(file_path)
    return _create
