import re

from .errors import GeoBlockedError
from ..utils import AsyncHttpClient, log

EDGE_REGION_PATTERN = re.compile(r"edge\d+-([a-z]+)")
EDGE_REGIONS = ("lax", "fra", "ams", "sin", "hnd")


def parse_edge_region(hls_source: str) -> str | None:
    match = EDGE_REGION_PATTERN.search(hls_source)
    if match is None:
        return None
    return match.group(1)


def replace_edge_region(hls_source: str, current: str, region: str) -> str:
    return hls_source.replace(f"-{current}.", f"-{region}.", 1)


async def find_working_edge_url(http: AsyncHttpClient, hls_source: str, attr: dict | None = None) -> str:
    """
    Validates the HLS source and falls back to other CDN edge regions when it is geo-blocked.

    Sources whose host carries no edge token are returned unchanged.
    Raises GeoBlockedError if no alternate region answers with 200.
    """
    if await is_reachable(http, hls_source):
        return hls_source

    current = parse_edge_region(hls_source)
    if current is None:
        return hls_source

    info = dict(attr or {})
    info["region"] = current
    log.warn("Edge region unreachable, trying alternatives", info)

    for region in EDGE_REGIONS:
        if region == current:
            continue
        alt_url = replace_edge_region(hls_source, current, region)
        if await is_reachable(http, alt_url):
            info["region"] = region
            log.info("Switched edge region", info)
            return alt_url

    raise GeoBlockedError(hls_source)


async def is_reachable(http: AsyncHttpClient, url: str) -> bool:
    try:
        return await http.head(url) == 200
    except Exception as ex:
        log.debug("HEAD request failed", {"url": url, "err_msg": str(ex)})
        return False
