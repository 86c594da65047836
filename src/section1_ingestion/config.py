"""
Configuration for Section 1: Feed Ingestion

NVD endpoint, query window, timeout and severity threshold.
"""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class FeedConfig:
    """Configuration for the NVD vulnerability feed."""

    BASE_URL: str = "https://services.nvd.nist.gov/rest/json/cves/2.0/"
    # Optional; raises the NVD rate limit but is not required.
    NVD_API_KEY: Optional[str] = os.getenv("NVD_API_KEY")
    USER_AGENT: str = "cve-outreach/1.0"

    # Trailing publication window queried on each run.
    WINDOW_HOURS: int = int(os.getenv("CVE_WINDOW_HOURS", "30"))
    REQUEST_TIMEOUT_SECONDS: int = 10
    # NVD caps a single page at 2000 results.
    RESULTS_PER_PAGE: int = 2000

    # Records must score strictly above this to qualify.
    SCORE_THRESHOLD: float = float(os.getenv("CVE_SCORE_THRESHOLD", "9.0"))
    DESCRIPTION_LANGUAGE: str = "en"
