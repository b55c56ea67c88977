"""
services/fetcher.py
-------------------
Fetches robot telemetry from the HTTP API.

Responsibilities:
    - Perform one GET per call against the configured endpoint.
    - Report the outcome as a FetchResult so callers can tell
      "no new data" apart from "the request failed".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import requests

from utils.logger import get_logger

logger = get_logger(__name__)


class FetchStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class FetchResult:
    """
    Outcome of a single fetch.

    Attributes:
        status: OK with records, EMPTY for an empty array, FAILED otherwise.
        records: Raw JSON objects (empty unless status is OK).
        error: The exception behind a FAILED status.
    """
    status: FetchStatus
    records: list = field(default_factory=list)
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, records: list) -> "FetchResult":
        return cls(FetchStatus.OK, list(records))

    @classmethod
    def empty(cls) -> "FetchResult":
        return cls(FetchStatus.EMPTY)

    @classmethod
    def failed(cls, error: BaseException) -> "FetchResult":
        return cls(FetchStatus.FAILED, error=error)

    def __bool__(self) -> bool:
        return bool(self.records)


class RecordFetcher:
    """
    HTTP client for the telemetry endpoint.

    No retries and no authentication: a failed request is reported once
    and the next poll tick simply tries again.
    """

    def __init__(
        self,
        api_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_url: Endpoint returning a JSON array of records.
            timeout: Seconds to wait for the server, None to wait forever.
            session: Optional pre-configured requests session.
        """
        self.api_url = api_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self) -> FetchResult:
        """Perform one GET and classify the response."""
        try:
            response = self._session.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching data from {self.api_url}: {e}")
            return FetchResult.failed(e)

        if not isinstance(data, list):
            error = ValueError(f"expected a JSON array, got {type(data).__name__}")
            logger.error(f"Error fetching data from {self.api_url}: {error}")
            return FetchResult.failed(error)

        if not data:
            return FetchResult.empty()

        logger.debug(f"Fetched {len(data)} record(s) from {self.api_url}")
        return FetchResult.ok(data)

    def close(self) -> None:
        self._session.close()


def fetch_data(api_url: str, timeout: Optional[float] = None) -> list:
    """
    Fetch records from the given API URL.

    Returns:
        The decoded JSON array, or an empty list if anything went wrong.
    """
    fetcher = RecordFetcher(api_url, timeout=timeout)
    try:
        return fetcher.fetch().records
    finally:
        fetcher.close()
