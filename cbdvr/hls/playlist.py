import re

from pydantic import BaseModel, ConfigDict

from .errors import PlaylistError, ResolutionNotFoundError
from .segment_watcher import SegmentHandler, SegmentWatcher
from .utils import root_url_of, decode_playlist
from ..utils import AsyncHttpClient

FRAMERATE_HIGH = 60
FRAMERATE_DEFAULT = 30
FRAMERATE_HIGH_MARKER = "FPS:60.0"

STREAM_INF_TAG = "#EXT-X-STREAM-INF:"
ATTRIBUTE_PATTERN = re.compile(r'(?P<key>[A-Z0-9-]+)=(?P<value>"[^"]*"|[^,]*)')


class Resolution(BaseModel):
    width: int
    framerates: dict[int, str] = {}


class Playlist(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_url: str
    root_url: str
    resolution: int
    framerate: int

    async def watch_segments(self, http: AsyncHttpClient, handler: SegmentHandler, attr: dict | None = None):
        watcher = SegmentWatcher(http, self.playlist_url, self.root_url, attr)
        await watcher.watch(handler)


class Stream(BaseModel):
    model_config = ConfigDict(frozen=True)

    hls_source: str

    async def get_playlist(self, http: AsyncHttpClient, resolution: int, framerate: int) -> Playlist:
        if self.hls_source == "":
            raise PlaylistError("HLS source is empty")
        text = await http.get_text(self.hls_source)
        return pick_playlist(text, self.hls_source, resolution, framerate)


def pick_playlist(master_text: str, base_url: str, resolution: int, framerate: int) -> Playlist:
    resolutions = parse_resolutions(master_text)

    variant = resolutions.get(resolution)
    if variant is None:
        candidates = [r for r in resolutions.values() if r.width < resolution]
        if len(candidates) > 0:
            variant = max(candidates, key=lambda r: r.width)
    if variant is None:
        raise ResolutionNotFoundError(resolution)

    final_framerate = framerate
    variant_uri = variant.framerates.get(framerate)
    if variant_uri is None:
        final_framerate = min(variant.framerates.keys())
        variant_uri = variant.framerates[final_framerate]

    root_url = root_url_of(base_url)
    return Playlist(
        playlist_url=root_url + variant_uri,
        root_url=root_url,
        resolution=variant.width,
        framerate=final_framerate,
    )


def parse_resolutions(master_text: str) -> dict[int, Resolution]:
    """Groups the variants of a master playlist by vertical resolution, then by framerate."""
    master = decode_playlist(master_text)
    if not master.is_master:
        raise PlaylistError("invalid master playlist format")

    labels = parse_variant_labels(master_text)
    resolutions: dict[int, Resolution] = {}
    for variant in master.playlists:
        if variant.is_iframe:
            continue
        res = variant.stream_info.resolution
        if res is None or not res.height:
            continue
        fr = FRAMERATE_DEFAULT
        if FRAMERATE_HIGH_MARKER in labels.get(variant.uri, ""):
            fr = FRAMERATE_HIGH
        if res.height not in resolutions:
            resolutions[res.height] = Resolution(width=res.height, framerates={})
        resolutions[res.height].framerates[fr] = variant.uri
    return resolutions


def parse_variant_labels(master_text: str) -> dict[str, str]:
    # variant uri -> NAME attribute of the preceding EXT-X-STREAM-INF tag
    result = {}
    label = None
    for line in master_text.splitlines():
        line = line.strip()
        if line.startswith(STREAM_INF_TAG):
            value = line[len(STREAM_INF_TAG) :]
            attrs = {m.group("key"): m.group("value").strip('"') for m in ATTRIBUTE_PATTERN.finditer(value)}
            label = attrs.get("NAME", "")
        elif label is not None and line != "" and not line.startswith("#"):
            result[line] = label
            label = None
    return result
