import pytest

from cbdvr.fetcher import GeoBlockedError, find_working_edge_url, parse_edge_region
from cbdvr.fetcher.edge_resolver import replace_edge_region
from tests.mock_helpers import AsyncHttpClientMock, SOURCE_URL


def region_url(region: str) -> str:
    return SOURCE_URL.replace("-sin.", f"-{region}.")


def test_parse_edge_region():
    assert parse_edge_region(SOURCE_URL) == "sin"
    assert parse_edge_region("https://edge3-lax.live.mmcdn.com/a/playlist.m3u8") == "lax"
    assert parse_edge_region("https://cdn.example.com/a/playlist.m3u8") is None


def test_replace_edge_region():
    assert replace_edge_region(SOURCE_URL, "sin", "fra") == region_url("fra")


@pytest.mark.asyncio
async def test_reachable_source_is_used_as_is():
    http = AsyncHttpClientMock(heads={SOURCE_URL: 200})
    assert await find_working_edge_url(http, SOURCE_URL) == SOURCE_URL
    assert http.head_calls == [SOURCE_URL]


@pytest.mark.asyncio
async def test_fallback_order_skips_current_region():
    http = AsyncHttpClientMock(heads={region_url("hnd"): 200})
    assert await find_working_edge_url(http, SOURCE_URL) == region_url("hnd")
    assert http.head_calls == [SOURCE_URL] + [region_url(r) for r in ["lax", "fra", "ams", "hnd"]]


@pytest.mark.asyncio
async def test_fallback_stops_at_first_success():
    http = AsyncHttpClientMock(heads={region_url("fra"): 200, region_url("ams"): 200})
    assert await find_working_edge_url(http, SOURCE_URL) == region_url("fra")
    assert http.head_calls == [SOURCE_URL, region_url("lax"), region_url("fra")]


@pytest.mark.asyncio
async def test_all_regions_blocked():
    http = AsyncHttpClientMock(heads={SOURCE_URL: 403})
    with pytest.raises(GeoBlockedError):
        await find_working_edge_url(http, SOURCE_URL)
    assert len(http.head_calls) == 5


@pytest.mark.asyncio
async def test_unknown_host_is_returned_unchanged():
    url = "https://cdn.example.com/live-hls/tester/playlist.m3u8"
    http = AsyncHttpClientMock()
    assert await find_working_edge_url(http, url) == url
    assert http.head_calls == [url]


@pytest.mark.asyncio
async def test_head_exception_counts_as_unreachable():
    class BrokenHeadClient(AsyncHttpClientMock):
        async def head(self, url: str, *args, **kwargs) -> int:
            self.head_calls.append(url)
            if url == SOURCE_URL:
                raise ConnectionError("reset by peer")
            return 200

    http = BrokenHeadClient()
    assert await find_working_edge_url(http, SOURCE_URL) == region_url("lax")
