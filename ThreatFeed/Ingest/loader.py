'''
Feed Ingestion

Purpose: Load raw IOC feeds from disk.

Responsibilities:
- Read a JSON array of raw IOC records
- Provide a sample feed for demo/testing

Why isolated:
- The dashboard fetches over HTTP; the CLI and tests read files. Both hand
  the resolved payload to the same pipeline.
'''

import copy
import json
import os
from typing import Any, Dict, List, Optional

__all__ = ["load_feed", "SAMPLE_FEED"]


SAMPLE_FEED: List[Dict[str, Any]] = [
	{"value": "185.220.101.4", "type": "ip", "source": "AbuseIPDB", "timestamp": "2024-03-01T08:15:00Z"},
	{"value": "45.153.160.0/24", "type": "subnet", "source": "Spamhaus DROP", "timestamp": "2024-03-01T09:30:00Z"},
	{"value": "http://login-secure-update.com/verify", "type": "url", "source": "PhishTank", "timestamp": "2024-03-01T11:05:00Z"},
	{"value": "91.240.118.172", "type": "ip", "source": "AlienVault OTX", "timestamp": "2024-03-02T07:45:00Z"},
	{"value": "http://cdn-files-share.net/payload.exe", "type": "url", "source": "URLhaus", "timestamp": "2024-03-02T13:20:00Z"},
	{"value": "185.220.101.4", "type": "ip", "source": "Feodo Tracker", "timestamp": "2024-03-03T06:00:00Z"},
	{"value": "103.75.190.0/23", "type": "subnet", "source": "Spamhaus DROP", "timestamp": "2024-03-03T10:10:00Z"},
	{"value": "194.26.29.113", "type": "ip", "source": "AbuseIPDB", "timestamp": "2024-03-03T16:40:00Z"},
	{"value": "d41d8cd98f00b204e9800998ecf8427e", "type": "md5", "source": "MalwareBazaar", "timestamp": "2024-03-03T18:00:00Z"},
]


def load_feed(path: Optional[str] = None, use_sample: bool = False) -> List[Dict[str, Any]]:
	"""
	Load a raw IOC feed.

	Args:
		path: Path to a JSON file holding an array of raw IOC records
		use_sample: Return a copy of SAMPLE_FEED and ignore path

	Returns:
		List of raw IOC dictionaries (not yet normalized)

	Raises:
		FileNotFoundError: If path is missing or not a file
		json.JSONDecodeError: If the file is not valid JSON
		ValueError: If the top-level JSON value is not an array
	"""
	if use_sample:
		return copy.deepcopy(SAMPLE_FEED)

	if not path or not os.path.isfile(path):
		raise FileNotFoundError(f"Feed file not found: {path}")

	with open(path, "r", encoding="utf-8") as f:
		data = json.load(f)

	if not isinstance(data, list):
		raise ValueError("feed must be a JSON array of IOC records")

	return data
