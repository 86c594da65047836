"""
Outreach pipeline

Ties Section 1 and Section 2 together for one run:

    feed -> severity filter -> description -> prompt -> model -> parse -> order

Records are handled one at a time in feed order. A failure scoped to one
record (no English description, unparseable model reply, nothing to order,
a failed shop call) is reported and the run moves on to the next record.
FeedUnavailable and ConfigurationError still abort the run.
"""

from collections import Counter
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..section1_ingestion.config import FeedConfig
from ..section1_ingestion.descriptions import select_description
from ..section1_ingestion.errors import RecordError
from ..section1_ingestion.feed_client import NVDFeedClient
from ..section1_ingestion.schemas import FeedResponse, VulnerabilityRecord
from ..section1_ingestion.severity import filter_by_severity, normalize
from .advisor import CompanyAdvisor
from .dispatcher import ActionDispatcher


class OutcomeStatus(str, Enum):
    ORDERED = "ordered"
    IDENTIFIED = "identified"  # dry run: company found, nothing ordered
    SKIPPED = "skipped"


class RecordOutcome(BaseModel):
    """What happened to one qualifying CVE."""

    cve_id: str
    score: float
    status: OutcomeStatus
    company_name: Optional[str] = None
    order_id: Optional[str] = None
    reason: Optional[str] = None
    detail: Optional[str] = None


class RunSummary(BaseModel):
    """Aggregate of a pipeline run."""

    threshold: float
    received: int = 0
    total_results: int = 0
    malformed_entries: int = 0
    qualified: int = 0
    dry_run: bool = False
    outcomes: list[RecordOutcome] = Field(default_factory=list)

    @property
    def ordered(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.ORDERED)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.SKIPPED)

    @property
    def skip_reasons(self) -> dict[str, int]:
        return dict(Counter(o.reason for o in self.outcomes if o.status == OutcomeStatus.SKIPPED))


class OutreachPipeline:
    """Run one batch of CVEs through identification and ordering."""

    def __init__(
        self,
        advisor: CompanyAdvisor,
        dispatcher: Optional[ActionDispatcher] = None,
        feed_client: Optional[NVDFeedClient] = None,
        threshold: float = FeedConfig.SCORE_THRESHOLD,
        language: str = FeedConfig.DESCRIPTION_LANGUAGE,
    ):
        """
        Args:
            advisor: Company advisor used for the model call
            dispatcher: Action dispatcher; None runs the pipeline dry
            feed_client: NVD client used by run()
            threshold: Records must score strictly above this
            language: Description language tag
        """
        self.advisor = advisor
        self.dispatcher = dispatcher
        self.feed_client = feed_client
        self.threshold = threshold
        self.language = language

    @property
    def dry_run(self) -> bool:
        return self.dispatcher is None

    def run(self, hours: int = FeedConfig.WINDOW_HOURS) -> RunSummary:
        """Fetch the trailing window and process it. FeedUnavailable propagates."""
        feed_client = self.feed_client or NVDFeedClient()
        feed = feed_client.fetch_recent(hours=hours)
        return self.process_feed(feed)

    def process_feed(self, feed: FeedResponse) -> RunSummary:
        """Filter a decoded feed and process every qualifying record."""
        print(f"Received {len(feed.records)} CVEs")

        critical = filter_by_severity(feed.records, self.threshold)
        summary = RunSummary(
            threshold=self.threshold,
            received=len(feed.records),
            total_results=feed.total_results,
            malformed_entries=len(feed.skipped_entries),
            qualified=len(critical),
            dry_run=self.dry_run,
        )

        for record in critical:
            print(f"Id: {record.id}")
            outcome = self.process_record(record)
            summary.outcomes.append(outcome)
            print("")

        print(f"Found {summary.qualified}/{summary.received} CVEs with score above {self.threshold}")
        if summary.malformed_entries:
            print(f"WARNING: {summary.malformed_entries} malformed feed entries were skipped")
        if not self.dry_run:
            print(f"Ordered {summary.ordered}, skipped {summary.skipped}")
        if summary.skipped:
            print(f"Skip reasons: {summary.skip_reasons}")
        return summary

    def process_record(self, record: VulnerabilityRecord) -> RecordOutcome:
        """Run one record end to end, turning RecordError into a skipped outcome."""
        score = normalize(record)
        try:
            description = select_description(record, self.language)
            response = self.advisor.identify_company(description)
            print(f"Company: {response.company.name} ({response.company.city}, {response.company.country})")

            if self.dispatcher is None:
                return RecordOutcome(
                    cve_id=record.id,
                    score=score,
                    status=OutcomeStatus.IDENTIFIED,
                    company_name=response.company.name,
                )

            confirmation = self.dispatcher.dispatch(response)
            print(f"Ordered {confirmation.product_name}: {confirmation.order_id}")
            return RecordOutcome(
                cve_id=record.id,
                score=score,
                status=OutcomeStatus.ORDERED,
                company_name=response.company.name,
                order_id=confirmation.order_id,
            )
        except RecordError as exc:
            print(f"WARNING: skipping {record.id} ({exc.reason}): {exc}")
            return RecordOutcome(
                cve_id=record.id,
                score=score,
                status=OutcomeStatus.SKIPPED,
                reason=exc.reason,
                detail=str(exc),
            )
