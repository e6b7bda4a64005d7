"""
Tests for the datasport.pl client.

HTTP is served by httpx.MockTransport, nothing leaves the process.
"""

import httpx
import pytest

from app.features.results.datasport import (
    DatasportClient,
    DatasportFetchError,
    DatasportURLError,
    apply_proxy,
    extract_results_id,
    get_json_url,
)

RESULTS_PAGE = "https://wyniki.datasport.pl/results5710/index.html"
RESULTS_JSON = "https://wyniki.datasport.pl/results5710/results.json"


def make_client(handler, proxy=""):
    """Client whose requests are answered by handler(request)."""
    return DatasportClient(proxy=proxy, timeout=5, transport=httpx.MockTransport(handler))


# =============================================================================
# Test URL Helpers
# =============================================================================

class TestJsonUrl:
    """Tests for results page -> results.json mapping."""

    def test_index_page(self):
        assert get_json_url(RESULTS_PAGE) == RESULTS_JSON

    def test_trailing_slash_only(self):
        assert get_json_url("https://wyniki.datasport.pl/results5710/") == RESULTS_JSON

    def test_http_kept(self):
        url = get_json_url("http://wyniki.datasport.pl/results12/abc/def.html")
        assert url == "http://wyniki.datasport.pl/results12/results.json"

    @pytest.mark.parametrize("url", [
        "https://wyniki.datasport.pl/results5710",
        "https://example.com/results5710/",
        "https://wyniki.datasport.pl/zapisy5710/",
        "",
    ])
    def test_invalid(self, url):
        with pytest.raises(DatasportURLError):
            get_json_url(url)

    def test_extract_results_id(self):
        assert extract_results_id(RESULTS_PAGE) == "results5710"
        assert extract_results_id("https://example.com/") is None

    def test_apply_proxy(self):
        proxied = apply_proxy(RESULTS_JSON, "https://proxy.example/?url=")
        assert proxied == (
            "https://proxy.example/?url="
            "https%3A%2F%2Fwyniki.datasport.pl%2Fresults5710%2Fresults.json"
        )

    def test_no_proxy(self):
        assert apply_proxy(RESULTS_JSON, None) == RESULTS_JSON
        assert apply_proxy(RESULTS_JSON, "") == RESULTS_JSON


# =============================================================================
# Test Fetching
# =============================================================================

class TestFetchResults:
    """Tests for DatasportClient.fetch_results."""

    async def test_success(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=[{"msc": "1", "czasnetto": "00:45:12,000"}])

        data = await make_client(handler).fetch_results(RESULTS_PAGE)

        assert data == [{"msc": "1", "czasnetto": "00:45:12,000"}]
        assert seen == [RESULTS_JSON]

    async def test_through_proxy(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=[{"msc": "1"}])

        client = make_client(handler, proxy="https://proxy.example/raw?url=")
        await client.fetch_results(RESULTS_PAGE)

        assert seen[0].startswith("https://proxy.example/raw?url=")
        assert "results5710" in seen[0]

    async def test_not_datasport(self):
        client = make_client(lambda request: httpx.Response(200, json=[]))
        with pytest.raises(DatasportURLError):
            await client.fetch_results("https://example.com/results1/")

    async def test_http_error(self):
        client = make_client(lambda request: httpx.Response(404))
        with pytest.raises(DatasportFetchError, match="404"):
            await client.fetch_results(RESULTS_PAGE)

    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DatasportFetchError):
            await make_client(handler).fetch_results(RESULTS_PAGE)

    async def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html></html>"))
        with pytest.raises(DatasportFetchError, match="JSON"):
            await client.fetch_results(RESULTS_PAGE)

    async def test_empty_list(self):
        client = make_client(lambda request: httpx.Response(200, json=[]))
        with pytest.raises(DatasportFetchError, match="No race results"):
            await client.fetch_results(RESULTS_PAGE)

    async def test_not_a_list(self):
        client = make_client(lambda request: httpx.Response(200, json={"error": "x"}))
        with pytest.raises(DatasportFetchError):
            await client.fetch_results(RESULTS_PAGE)

    async def test_non_object_entries(self):
        client = make_client(
            lambda request: httpx.Response(200, json=[{"msc": "1"}, "junk"])
        )
        with pytest.raises(DatasportFetchError, match="objects"):
            await client.fetch_results(RESULTS_PAGE)
