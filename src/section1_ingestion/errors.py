"""
Exceptions raised while ingesting and triaging CVE records.
"""


class FeedUnavailable(Exception):
    """The vulnerability feed could not be fetched or decoded. Fatal for a run."""


class RecordError(Exception):
    """
    Base class for failures scoped to a single CVE record.

    The pipeline catches these, skips the record, and carries on with the
    rest of the batch.
    """

    reason: str = "record_error"


class NoDescriptionFound(RecordError):
    """The record has no description in the requested language."""

    reason = "no_description"
