"""Environment-driven configuration for docmark."""

from __future__ import annotations

import os


DEFAULT_SITE_HOST = ""
DEFAULT_SITE_URL = "https://localhost"
DEFAULT_MAX_DEPTH = 32
DEFAULT_LOG_LEVEL = "INFO"

# Links whose href contains this host open in the same tab. Empty means every
# absolute http(s) link is treated as external.
DOCMARK_SITE_HOST = os.getenv("DOCMARK_SITE_HOST", DEFAULT_SITE_HOST)
DOCMARK_SITE_URL = os.getenv("DOCMARK_SITE_URL", DEFAULT_SITE_URL).rstrip("/")
DOCMARK_MAX_DEPTH = int(os.getenv("DOCMARK_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)))
DOCMARK_LOG_LEVEL = os.getenv("DOCMARK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
