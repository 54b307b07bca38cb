import asyncio

from .file_writer import SegmentFileWriter
from ..config import RecordConfig, RequestConfig
from ..fetcher import ChaturbateFetcher, ChannelOfflineError, PrivateStreamError, GeoBlockedError
from ..utils import AsyncHttpClient, log, error_dict, get_headers


class ChannelRecorder:
    """Drives watch sessions for a single channel until stopped."""

    def __init__(self, conf: RecordConfig, req_conf: RequestConfig):
        self.conf = conf
        self.__http = AsyncHttpClient(timeout_sec=req_conf.timeout_sec)
        self.__http.set_headers(get_headers(user_agent=req_conf.user_agent, cookies=req_conf.cookies))
        self.__fetcher = ChaturbateFetcher(self.__http, req_conf.domain)

        self.abort_flag = False
        self.__stop_event = asyncio.Event()
        self.__session: asyncio.Task | None = None

    async def run(self):
        log.info("Start Channel", self.__attr())
        while not self.abort_flag:
            writer = self.__create_writer()
            try:
                self.__session = asyncio.create_task(self.__record(writer), name=f"session:{self.conf.username}")
                await self.__session
            except asyncio.CancelledError:
                if not self.abort_flag:
                    raise
            except ChannelOfflineError:
                log.info("Channel is offline", self.__attr())
            except PrivateStreamError:
                log.info("Channel is in a private show", self.__attr())
            except GeoBlockedError as ex:
                log.warn("Stream is geo-blocked in every edge region", self.__attr(ex))
            except Exception as ex:
                log.error("Error during recording", self.__attr(ex))
            finally:
                self.__session = None
                await writer.close()

            if self.abort_flag:
                break
            await self.__wait()
        log.info("Stop Channel", self.__attr())

    def stop(self):
        self.abort_flag = True
        self.__stop_event.set()
        if self.__session is not None:
            self.__session.cancel()

    async def __record(self, writer: SegmentFileWriter):
        stream = await self.__fetcher.get_stream(self.conf.username)
        playlist = await stream.get_playlist(self.__http, self.conf.resolution, self.conf.framerate)

        attr = self.__attr()
        attr["resolution"] = playlist.resolution
        attr["framerate"] = playlist.framerate
        log.info("Start Recording", attr)

        await playlist.watch_segments(self.__http, writer.write, attr={"username": self.conf.username})
        log.info("Finish Recording", self.__attr())

    async def __wait(self):
        try:
            await asyncio.wait_for(self.__stop_event.wait(), timeout=self.conf.interval_min * 60)
        except asyncio.TimeoutError:
            pass

    def __create_writer(self) -> SegmentFileWriter:
        return SegmentFileWriter(
            username=self.conf.username,
            pattern=self.conf.pattern,
            max_duration_min=self.conf.max_duration_min,
            max_filesize_mb=self.conf.max_filesize_mb,
            compress=self.conf.compress,
        )

    def __attr(self, ex: BaseException | None = None) -> dict:
        attr = {"username": self.conf.username}
        if ex is not None:
            for k, v in error_dict(ex).items():
                attr[k] = v
        return attr
