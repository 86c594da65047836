"""
Pick the human-readable description of a CVE in a given language.
"""

from .errors import NoDescriptionFound
from .schemas import VulnerabilityRecord


def select_description(record: VulnerabilityRecord, lang: str = "en") -> str:
    """
    Return the first description whose language tag equals ``lang``.

    The match is exact and case-sensitive.

    Raises:
        NoDescriptionFound: If no description carries the tag.
    """
    for description in record.descriptions:
        if description.lang == lang:
            return description.value
    raise NoDescriptionFound(f"{record.id} has no '{lang}' description")
