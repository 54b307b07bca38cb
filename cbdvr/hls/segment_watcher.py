import asyncio
from pathlib import PurePosixPath
from typing import Awaitable, Callable

from streamlink.stream.hls.m3u8 import M3U8
from streamlink.stream.hls.segment import HLSSegment

from .errors import PlaylistError
from .utils import segment_seq, join_url, decode_playlist
from ..utils import AsyncHttpClient, log, error_dict

WATCH_INTERVAL_SEC = 1
SEGMENT_RETRY_ATTEMPTS = 3
SEGMENT_RETRY_DELAY_SEC = 0.6

SegmentHandler = Callable[[bytes, float], Awaitable[None]]


class SegmentWatcher:
    """
    Polls a media playlist and hands every new segment to a handler in sequence order.

    Runs until the handler raises, the playlist can no longer be fetched or decoded,
    or the surrounding task is cancelled.
    """

    def __init__(self, http: AsyncHttpClient, playlist_url: str, root_url: str, attr: dict | None = None):
        self.__http = http
        self.playlist_url = playlist_url
        self.root_url = root_url
        self.attr = attr or {}
        self.last_seq: int | None = None

    async def watch(self, handler: SegmentHandler):
        self.last_seq = None
        while True:
            await self.__interval(handler)
            await asyncio.sleep(WATCH_INTERVAL_SEC)

    async def __interval(self, handler: SegmentHandler):
        text = await self.__http.get_text(self.playlist_url, attr=self.attr)
        playlist: M3U8 = decode_playlist(text)
        if playlist.is_master:
            raise PlaylistError("expected a media playlist, got a master playlist")

        segments: list[HLSSegment] = playlist.segments
        for seg in segments:
            seq = segment_seq(seg.uri)
            if seq is None:
                continue
            if self.last_seq is not None and seq <= self.last_seq:
                continue
            self.last_seq = seq

            b = await self.__fetch_segment(seg, seq)
            if b is None:
                # give the next playlist refresh a chance to recover
                break
            await handler(b, seg.duration)

    async def __fetch_segment(self, seg: HLSSegment, seq: int) -> bytes | None:
        try:
            return await self.__http.get_bytes(
                join_url(self.root_url, seg.uri),
                attr=self.__attr(seq=seq),
                print_error=False,
                retry_limit=SEGMENT_RETRY_ATTEMPTS - 1,
                retry_delay_sec=SEGMENT_RETRY_DELAY_SEC,
            )
        except Exception as ex:
            attr = self.__attr(seq=seq)
            for k, v in error_dict(ex).items():
                attr[k] = v
            attr["filename"] = PurePosixPath(seg.uri).name
            attr["attempts"] = SEGMENT_RETRY_ATTEMPTS
            attr.pop("stacktrace", None)
            log.warn("Failed to fetch segment, skipping the rest of this poll", attr)
            return None

    def __attr(self, seq: int | None = None) -> dict:
        attr = dict(self.attr)
        attr["playlist_url"] = self.playlist_url
        if seq is not None:
            attr["seq"] = seq
        return attr
