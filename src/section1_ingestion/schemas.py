"""
Pydantic schemas for Section 1: Feed Ingestion

These models describe the CVE records pulled from the NVD CVE API 2.0
and handed to Section 2 (Outreach).
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScoringScheme(str, Enum):
    """CVSS version a base score was computed with."""
    V4_0 = "v4.0"
    V3_1 = "v3.1"
    V2 = "v2"


# NVD metric keys for each scheme under cve.metrics
NVD_METRIC_KEYS: dict[ScoringScheme, str] = {
    ScoringScheme.V4_0: "cvssMetricV40",
    ScoringScheme.V3_1: "cvssMetricV31",
    ScoringScheme.V2: "cvssMetricV2",
}


class Description(BaseModel):
    """A localized description of a vulnerability."""
    model_config = ConfigDict(frozen=True)

    lang: str = Field(..., description="Language tag, e.g. 'en'")
    value: str = Field(default="", description="Description text")


class VulnerabilityRecord(BaseModel):
    """
    A single CVE as published by the NVD.

    Only the fields the pipeline needs are kept. Each scoring scheme maps to
    the base scores found for it, in source order; any scheme may be empty.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="CVE identifier, e.g. CVE-2024-1234")
    published: datetime = Field(..., description="Publication timestamp")
    descriptions: list[Description] = Field(default_factory=list, description="Localized descriptions")
    scores: dict[ScoringScheme, list[float]] = Field(
        default_factory=dict,
        description="Base scores per CVSS scheme",
    )

    def scores_for(self, scheme: ScoringScheme) -> list[float]:
        """Return the base scores recorded for a scheme (possibly empty)."""
        return self.scores.get(scheme, [])

    @classmethod
    def from_nvd(cls, entry: dict[str, Any]) -> "VulnerabilityRecord":
        """Build a record from one item of the NVD ``vulnerabilities`` list."""
        cve = entry.get("cve") or {}
        metrics = cve.get("metrics") or {}

        scores: dict[ScoringScheme, list[float]] = {}
        for scheme, key in NVD_METRIC_KEYS.items():
            scores[scheme] = [
                float(metric["cvssData"]["baseScore"])
                for metric in metrics.get(key) or []
                if (metric.get("cvssData") or {}).get("baseScore") is not None
            ]

        return cls(
            id=cve["id"],
            published=cve["published"],
            descriptions=[Description(**item) for item in cve.get("descriptions") or []],
            scores=scores,
        )


# NVD entries that do not decode into a VulnerabilityRecord
MALFORMED_ENTRY_ERRORS = (KeyError, TypeError, AttributeError, ValueError)


class FeedResponse(BaseModel):
    """A decoded NVD search response."""
    total_results: int = Field(default=0, description="totalResults reported by the feed")
    records: list[VulnerabilityRecord] = Field(default_factory=list, description="Records in feed order")
    skipped_entries: list[str] = Field(
        default_factory=list,
        description="Ids (or positions) of entries dropped because they did not decode",
    )

    @classmethod
    def from_nvd(cls, payload: dict[str, Any]) -> "FeedResponse":
        """
        Decode an NVD payload, skipping entries that are malformed.

        A bad entry is reported with a warning and left out; the rest of the
        batch is kept in feed order.
        """
        records: list[VulnerabilityRecord] = []
        skipped: list[str] = []
        for index, item in enumerate(payload.get("vulnerabilities") or []):
            try:
                records.append(VulnerabilityRecord.from_nvd(item))
            except MALFORMED_ENTRY_ERRORS as exc:
                label = _entry_label(item, index)
                print(f"WARNING: skipping malformed CVE entry {label}: {exc!r}")
                skipped.append(label)

        return cls(
            total_results=payload.get("totalResults", 0),
            records=records,
            skipped_entries=skipped,
        )


def _entry_label(item: Any, index: int) -> str:
    cve = item.get("cve") if isinstance(item, dict) else None
    if isinstance(cve, dict) and isinstance(cve.get("id"), str):
        return cve["id"]
    return f"#{index}"
