"""
Tests for Section 1: Feed Ingestion
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.section1_ingestion.schemas import (
    Description,
    FeedResponse,
    ScoringScheme,
    VulnerabilityRecord,
)
from src.section1_ingestion.severity import SCHEME_PREFERENCE, filter_by_severity, normalize
from src.section1_ingestion.descriptions import select_description
from src.section1_ingestion.errors import NoDescriptionFound, RecordError


def _record(cve_id="CVE-2024-0001", v40=(), v31=(), v2=(), descriptions=()):
    return VulnerabilityRecord(
        id=cve_id,
        published=datetime(2024, 6, 1, 12, 0, 0),
        descriptions=[Description(lang=lang, value=value) for lang, value in descriptions],
        scores={
            ScoringScheme.V4_0: list(v40),
            ScoringScheme.V3_1: list(v31),
            ScoringScheme.V2: list(v2),
        },
    )


class TestSchemas:
    """Test decoding of NVD payloads."""

    def test_from_nvd_reads_all_schemes(self, make_entry):
        record = VulnerabilityRecord.from_nvd(make_entry(v40=[9.3], v31=[9.8, 7.5], v2=[10.0]))

        assert record.id == "CVE-2024-0001"
        assert record.published == datetime(2024, 6, 1, 12, 15, 9, 557000)
        assert record.scores_for(ScoringScheme.V4_0) == [9.3]
        assert record.scores_for(ScoringScheme.V3_1) == [9.8, 7.5]
        assert record.scores_for(ScoringScheme.V2) == [10.0]
        assert record.descriptions[0].lang == "en"

    def test_from_nvd_tolerates_missing_metrics(self):
        record = VulnerabilityRecord.from_nvd(
            {"cve": {"id": "CVE-2024-0002", "published": "2024-06-01T00:00:00", "descriptions": []}}
        )

        assert all(record.scores_for(scheme) == [] for scheme in ScoringScheme)
        assert record.descriptions == []

    def test_record_is_immutable(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.id = "CVE-2099-9999"

    def test_feed_response_keeps_feed_order(self, make_entry):
        feed = FeedResponse.from_nvd(
            {
                "totalResults": 2,
                "vulnerabilities": [make_entry("CVE-2024-0002"), make_entry("CVE-2024-0001")],
            }
        )

        assert feed.total_results == 2
        assert [r.id for r in feed.records] == ["CVE-2024-0002", "CVE-2024-0001"]


class TestNormalize:
    def test_v40_wins_over_other_schemes(self):
        assert normalize(_record(v40=[6.1], v31=[9.8], v2=[10.0])) == 6.1

    def test_v31_used_when_no_v40(self):
        assert normalize(_record(v31=[8.8], v2=[10.0])) == 8.8

    def test_v2_used_as_last_resort(self):
        assert normalize(_record(v2=[5.0])) == 5.0

    def test_first_entry_in_source_order(self):
        assert normalize(_record(v31=[7.2, 9.9])) == 7.2

    def test_unscored_record_is_zero(self):
        assert normalize(_record()) == 0.0

    def test_record_without_scores_dict(self):
        record = VulnerabilityRecord(id="CVE-2024-0003", published=datetime(2024, 1, 1))
        assert normalize(record) == 0.0

    def test_preference_order(self):
        assert [scheme for scheme, _ in SCHEME_PREFERENCE] == [
            ScoringScheme.V4_0,
            ScoringScheme.V3_1,
            ScoringScheme.V2,
        ]


class TestFilterBySeverity:
    def test_threshold_is_strict(self):
        records = [
            _record("CVE-A", v31=[9.0]),
            _record("CVE-B", v31=[9.1]),
            _record("CVE-C", v40=[10.0]),
        ]

        assert [r.id for r in filter_by_severity(records, 9.0)] == ["CVE-B", "CVE-C"]

    def test_preserves_input_order(self):
        records = [
            _record("CVE-C", v2=[9.5]),
            _record("CVE-A", v31=[9.9]),
            _record("CVE-B", v40=[9.2]),
        ]

        assert [r.id for r in filter_by_severity(records, 9.0)] == ["CVE-C", "CVE-A", "CVE-B"]

    def test_unscored_records_never_pass_positive_threshold(self):
        assert filter_by_severity([_record()], 0.1) == []

    def test_uses_normalized_score_not_max(self):
        # v4.0 is preferred even though v2 is higher
        assert filter_by_severity([_record(v40=[8.0], v2=[10.0])], 9.0) == []

    def test_empty_input(self):
        assert filter_by_severity([], 9.0) == []


class TestSelectDescription:
    def test_returns_first_matching_language(self):
        record = _record(descriptions=[("es", "Una falla"), ("en", "First"), ("en", "Second")])
        assert select_description(record, "en") == "First"

    def test_match_is_case_sensitive(self):
        record = _record(descriptions=[("EN", "Shouting")])
        with pytest.raises(NoDescriptionFound):
            select_description(record, "en")

    def test_only_other_languages(self):
        record = _record(descriptions=[("es", "Una falla"), ("fr", "Une faille")])
        with pytest.raises(NoDescriptionFound):
            select_description(record, "en")

    def test_empty_description_list(self):
        with pytest.raises(NoDescriptionFound) as exc_info:
            select_description(_record(), "en")

        assert isinstance(exc_info.value, RecordError)
        assert exc_info.value.reason == "no_description"
        assert "CVE-2024-0001" in str(exc_info.value)

    def test_default_language_is_english(self):
        record = _record(descriptions=[("en", "English text")])
        assert select_description(record) == "English text"
