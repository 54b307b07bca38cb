from pathlib import PurePosixPath
from urllib.parse import urlparse

from streamlink.stream.hls.m3u8 import M3U8Parser, M3U8

from .errors import PlaylistError

PLAYLIST_FILENAME = "playlist.m3u8"


def segment_seq(uri: str) -> int | None:
    """
    Extracts the sequence number encoded at the end of a segment filename.

    e.g. ``media_w1_b5128000_t64RlBTOjMwLjA=_2311.ts`` -> 2311
    """
    stem = PurePosixPath(urlparse(uri).path).stem
    idx = stem.rfind("_")
    if idx == -1:
        return None
    digits = stem[idx + 1 :]
    if not digits.isdecimal():
        return None
    return int(digits)


def root_url_of(hls_source: str) -> str:
    return hls_source.removesuffix(PLAYLIST_FILENAME)


def join_url(root_url: str, uri: str) -> str:
    if "://" in uri:
        return uri
    return f"{root_url}{uri}"


def decode_playlist(text: str) -> M3U8:
    try:
        return M3U8Parser().parse(text)
    except ValueError as ex:
        raise PlaylistError(f"failed to decode m3u8 playlist: {ex}") from ex
