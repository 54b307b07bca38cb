from pydantic import BaseModel

from .edge_resolver import find_working_edge_url
from .errors import PrivateStreamError, ChannelOfflineError
from ..hls import Stream
from ..utils import AsyncHttpClient


class ChatVideoContext(BaseModel):
    hls_source: str | None = None
    room_status: str | None = None


class ChaturbateFetcher:
    def __init__(self, http: AsyncHttpClient, domain: str):
        self.__http = http
        self.__domain = domain

    def api_url(self, username: str) -> str:
        return f"{self.__domain.rstrip('/')}/api/chatvideocontext/{username}/"

    async def fetch_context(self, username: str) -> ChatVideoContext:
        data = await self.__http.get_json(self.api_url(username), attr={"username": username})
        if not isinstance(data, dict):
            raise ValueError("Invalid response format")
        return ChatVideoContext(**data)

    async def get_stream(self, username: str) -> Stream:
        ctx = await self.fetch_context(username)

        if ctx.room_status == "private":
            raise PrivateStreamError(username)
        if ctx.room_status in ("away", "offline"):
            raise ChannelOfflineError(username)
        if not ctx.hls_source:
            raise ChannelOfflineError(username)

        hls_source = await find_working_edge_url(self.__http, ctx.hls_source, attr={"username": username})
        return Stream(hls_source=hls_source)
