from typing import Any

from cbdvr.utils import AsyncHttpClient, HttpRequestError

SOURCE_URL = "https://edge14-sin.live.mmcdn.com/live-hls/amlst:tester-sd-abc_trns_h264/playlist.m3u8"
ROOT_URL = "https://edge14-sin.live.mmcdn.com/live-hls/amlst:tester-sd-abc_trns_h264/"

MASTER_M3U8 = """#EXTM3U
#EXT-X-VERSION:6
#EXT-X-STREAM-INF:BANDWIDTH=5128000,RESOLUTION=1920x1080,CODECS="avc1.4d002a,mp4a.40.2",NAME="FPS:60.0"
chunklist_w1_b5128000_t64RlBTOjYwLjA=.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=4128000,RESOLUTION=1920x1080,CODECS="avc1.4d002a,mp4a.40.2",NAME="FPS:30.0"
chunklist_w1_b4128000_t64RlBTOjMwLjA=.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2128000,RESOLUTION=1280x720,CODECS="avc1.4d001f,mp4a.40.2",NAME="FPS:30.0"
chunklist_w1_b2128000_t64RlBTOjMwLjA=.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=1128000,RESOLUTION=854x480,CODECS="avc1.4d001f,mp4a.40.2",NAME="FPS:30.0"
chunklist_w1_b1128000_t64RlBTOjMwLjA=.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=628000,RESOLUTION=640x360,CODECS="avc1.4d001e,mp4a.40.2",NAME="FPS:30.0"
chunklist_w1_b628000_t64RlBTOjMwLjA=.m3u8
"""


def seg_uri(seq: int) -> str:
    return f"media_w1_b2128000_t64RlBTOjMwLjA=_{seq}.ts"


def media_m3u8(seqs: list[int], duration: float = 2.0, end: bool = False, extra_uris: list[str] | None = None) -> str:
    lines = [
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-TARGETDURATION:2",
        f"#EXT-X-MEDIA-SEQUENCE:{seqs[0] if len(seqs) > 0 else 0}",
    ]
    for uri in extra_uris or []:
        lines.append(f"#EXTINF:{duration:.3f},")
        lines.append(uri)
    for seq in seqs:
        lines.append(f"#EXTINF:{duration:.3f},")
        lines.append(seg_uri(seq))
    if end:
        lines.append("#EXT-X-ENDLIST")
    return "\n".join(lines) + "\n"


class AsyncHttpClientMock(AsyncHttpClient):
    """
    Scripted client: text bodies are served in order per url and a 404 is raised once they run out.
    HEAD answers 404 unless a status is configured.
    """

    def __init__(
        self,
        texts: dict[str, list[str]] | None = None,
        jsons: dict[str, Any] | None = None,
        heads: dict[str, int] | None = None,
        failing_urls: set[str] | None = None,
    ):
        super().__init__()
        self.texts = {k: list(v) for k, v in (texts or {}).items()}
        self.jsons = jsons or {}
        self.heads = heads or {}
        self.failing_urls = failing_urls or set()
        self.head_calls: list[str] = []
        self.bytes_calls: list[str] = []

    async def get_text(self, url: str, *args, **kwargs) -> str:
        queue = self.texts.get(url)
        if not queue:
            raise HttpRequestError("Failed to request", 404, url, "GET", "Not Found")
        return queue.pop(0)

    async def get_json(self, url: str, *args, **kwargs) -> Any:
        if url not in self.jsons:
            raise HttpRequestError("Failed to request", 404, url, "GET", "Not Found")
        return self.jsons[url]

    async def get_bytes(self, url: str, *args, **kwargs) -> bytes:
        self.bytes_calls.append(url)
        if url in self.failing_urls:
            raise HttpRequestError("Failed to request", 503, url, "GET", "Service Unavailable")
        return url.encode("utf-8")

    async def head(self, url: str, *args, **kwargs) -> int:
        self.head_calls.append(url)
        return self.heads.get(url, 404)
