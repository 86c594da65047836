"""
Section 1: Feed Ingestion

Pulls recently published CVEs from the NVD, normalizes their CVSS scores
across scheme versions, and selects the critical ones for outreach.

Example:
    >>> from src.section1_ingestion import NVDFeedClient, filter_by_severity
    >>>
    >>> feed = NVDFeedClient().fetch_recent(hours=30)
    >>> critical = filter_by_severity(feed.records, 9.0)
"""

from .schemas import (
    Description,
    FeedResponse,
    ScoringScheme,
    VulnerabilityRecord,
)
from .errors import FeedUnavailable, NoDescriptionFound, RecordError
from .severity import filter_by_severity, normalize
from .descriptions import select_description
from .feed_client import NVDFeedClient, publication_window

__all__ = [
    # Schemas
    "Description",
    "FeedResponse",
    "ScoringScheme",
    "VulnerabilityRecord",
    # Errors
    "FeedUnavailable",
    "NoDescriptionFound",
    "RecordError",
    # Triage
    "normalize",
    "filter_by_severity",
    "select_description",
    # Feed
    "NVDFeedClient",
    "publication_window",
]
