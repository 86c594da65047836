"""
NVD feed client.

Fetches every CVE published inside a trailing time window from the
NVD CVE API 2.0 and decodes it into VulnerabilityRecord objects.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import requests

from .config import FeedConfig
from .errors import FeedUnavailable
from .schemas import FeedResponse


def publication_window(hours: int, end: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return the (start, end) pair covering the last ``hours`` hours."""
    end = end or datetime.now(timezone.utc)
    return end - timedelta(hours=hours), end


class NVDFeedClient:
    """Blocking client for the NVD CVE search endpoint."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = FeedConfig.BASE_URL,
        api_key: Optional[str] = FeedConfig.NVD_API_KEY,
        timeout_seconds: int = FeedConfig.REQUEST_TIMEOUT_SECONDS,
        results_per_page: int = FeedConfig.RESULTS_PER_PAGE,
    ):
        self.session = session or requests.Session()
        # noRejected is a bare flag, so it rides on the URL rather than in params.
        self.url = f"{base_url}?noRejected"
        self.timeout_seconds = timeout_seconds
        self.results_per_page = results_per_page
        self.headers: dict[str, str] = {"User-Agent": FeedConfig.USER_AGENT}
        if api_key:
            self.headers["apiKey"] = api_key

    def _get_page(self, params: dict[str, Any]) -> dict[str, Any]:
        """GET one page of results and return the decoded JSON body."""
        try:
            response = self.session.get(
                self.url,
                params=params,
                headers=self.headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise FeedUnavailable(f"NVD request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise FeedUnavailable(f"NVD returned invalid JSON: {response.text[:200]}") from exc

        if not isinstance(data, dict):
            raise FeedUnavailable(f"NVD returned unexpected payload type: {type(data).__name__}")
        total_results = data.get("totalResults", 0)
        vulnerabilities = data.get("vulnerabilities") or []
        if not isinstance(total_results, int) or not isinstance(vulnerabilities, list):
            raise FeedUnavailable("NVD payload is missing a numeric totalResults or a vulnerabilities list")
        return data

    def fetch_window(self, start: datetime, end: datetime) -> FeedResponse:
        """
        Fetch all CVEs published between ``start`` and ``end``.

        Pages through the result set using startIndex until totalResults
        entries have been collected or the feed returns an empty page.

        Raises:
            FeedUnavailable: On network errors, timeouts, non-2xx responses
                or undecodable payloads.
        """
        params: dict[str, Any] = {
            "pubStartDate": start.isoformat(timespec="seconds"),
            "pubEndDate": end.isoformat(timespec="seconds"),
            "resultsPerPage": self.results_per_page,
            "startIndex": 0,
        }

        print(f"Getting {self.url} ({params['pubStartDate']} to {params['pubEndDate']})")

        entries: list[dict[str, Any]] = []
        total_results = 0
        while True:
            page = self._get_page(params)
            total_results = page.get("totalResults", 0)
            batch = page.get("vulnerabilities") or []
            entries.extend(batch)

            if not batch or len(entries) >= total_results:
                break
            params["startIndex"] = len(entries)

        try:
            return FeedResponse.from_nvd({"totalResults": total_results, "vulnerabilities": entries})
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            raise FeedUnavailable(f"NVD returned a malformed payload: {exc}") from exc

    def fetch_recent(self, hours: int = FeedConfig.WINDOW_HOURS) -> FeedResponse:
        """Fetch CVEs published in the trailing ``hours`` window."""
        start, end = publication_window(hours)
        return self.fetch_window(start, end)
