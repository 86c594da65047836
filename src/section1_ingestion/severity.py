"""
Severity normalization and filtering for CVE records.

A record may carry CVSS scores from several schemes at once. The newest
scheme available wins; records with no score at all normalize to 0.0 so
they never clear a positive threshold.
"""

from typing import Callable, Iterable

from .schemas import ScoringScheme, VulnerabilityRecord

UNSCORED: float = 0.0

# Checked in order; the first scheme with at least one score wins.
SCHEME_PREFERENCE: list[tuple[ScoringScheme, Callable[[VulnerabilityRecord], list[float]]]] = [
    (ScoringScheme.V4_0, lambda record: record.scores_for(ScoringScheme.V4_0)),
    (ScoringScheme.V3_1, lambda record: record.scores_for(ScoringScheme.V3_1)),
    (ScoringScheme.V2, lambda record: record.scores_for(ScoringScheme.V2)),
]


def normalize(record: VulnerabilityRecord) -> float:
    """Return the base score of the preferred scheme, or 0.0 when unscored."""
    for _scheme, accessor in SCHEME_PREFERENCE:
        scores = accessor(record)
        if scores:
            return scores[0]
    return UNSCORED


def filter_by_severity(
    records: Iterable[VulnerabilityRecord],
    threshold: float,
) -> list[VulnerabilityRecord]:
    """Keep records scoring strictly above ``threshold``, in input order."""
    return [record for record in records if normalize(record) > threshold]
