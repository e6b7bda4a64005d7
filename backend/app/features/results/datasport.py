"""
Datasport.pl results client.

Maps a results page URL to its results.json endpoint and downloads it.

URL format:
    https://wyniki.datasport.pl/results5710/index.html
    -> https://wyniki.datasport.pl/results5710/results.json
"""

import logging
import re
from typing import Any, Optional
from urllib.parse import quote

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

_RESULTS_URL = re.compile(r"(https?://wyniki\.datasport\.pl/results\d+)/", re.IGNORECASE)
_RESULTS_ID = re.compile(r"results(\d+)", re.IGNORECASE)


# =============================================================================
# Exceptions
# =============================================================================

class DatasportError(Exception):
    """Base datasport error."""
    pass


class DatasportURLError(DatasportError):
    """URL is not a datasport results URL."""
    pass


class DatasportFetchError(DatasportError):
    """Download failed or returned no results."""
    pass


# =============================================================================
# URL helpers
# =============================================================================

def get_json_url(url: str) -> str:
    """
    Get the results.json URL for a datasport results page.

    Raises:
        DatasportURLError: If the URL does not match
            https://wyniki.datasport.pl/results<number>/...
    """
    match = _RESULTS_URL.search(url or "")
    if not match:
        raise DatasportURLError(
            "Invalid URL format. Expected format: "
            "https://wyniki.datasport.pl/results<number>/..."
        )
    return f"{match.group(1)}/results.json"


def extract_results_id(url: str) -> Optional[str]:
    """Extract "results<number>" from a datasport URL, or None."""
    match = _RESULTS_ID.search(url or "")
    return f"results{match.group(1)}" if match else None


def apply_proxy(json_url: str, proxy: Optional[str]) -> str:
    """Prefix the URL with a proxy, URL-encoding it as the proxy expects."""
    if not proxy:
        return json_url
    return f"{proxy}{quote(json_url, safe='')}"


# =============================================================================
# Client
# =============================================================================

class DatasportClient:
    """Downloads results.json exports from datasport.pl."""

    def __init__(
        self,
        proxy: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.proxy = proxy if proxy is not None else settings.datasport_proxy
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    async def fetch_results(self, url: str) -> list[dict[str, Any]]:
        """
        Fetch raw result records for a datasport results page.

        Args:
            url: Any URL under https://wyniki.datasport.pl/results<number>/

        Returns:
            Raw list of result mappings as found in results.json

        Raises:
            DatasportURLError: Not a datasport URL
            DatasportFetchError: HTTP error, invalid JSON, empty list or
                non-object entries
        """
        if not url or "datasport.pl" not in url.lower():
            raise DatasportURLError("Please provide a valid wyniki.datasport.pl URL")

        request_url = apply_proxy(get_json_url(url), self.proxy)
        logger.info(f"Fetching datasport results: {request_url}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    request_url, headers={"Accept": "application/json"}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise DatasportFetchError(
                f"Failed to fetch data: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise DatasportFetchError(f"Unable to fetch data: {e}") from e
        except ValueError as e:
            raise DatasportFetchError("Response is not valid JSON") from e

        if not isinstance(data, list) or not data:
            raise DatasportFetchError(
                "No race results found. The results.json file may be empty."
            )
        if not all(isinstance(entry, dict) for entry in data):
            raise DatasportFetchError("Unexpected results.json format: entries must be objects")

        logger.info(f"Fetched {len(data)} records from {extract_results_id(url)}")
        return data
