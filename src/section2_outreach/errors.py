"""
Exceptions raised by Section 2: Outreach.

Everything except ConfigurationError is scoped to one CVE record.
"""

from ..section1_ingestion.errors import RecordError


class ConfigurationError(Exception):
    """A required credential is missing. Fatal at startup."""


class ModelCallError(RecordError):
    """The language model request failed or returned no text."""

    reason = "model_call_failed"


class MalformedResponse(RecordError):
    """The model reply could not be parsed into a StructuredResponse."""

    reason = "malformed_response"


class NoEligibleProduct(RecordError):
    """Every listed product was a placeholder or subscription-only."""

    reason = "no_eligible_product"


class CommerceError(RecordError):
    """A commerce API call failed."""

    reason = "commerce_call_failed"
