import asyncio
from enum import Enum
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from .error import error_dict
from .errors import HttpRequestError
from .logger import log


class ReturnType(Enum):
    TEXT = "text"
    JSON = "json"
    RAW = "raw"
    STATUS = "status"


class AsyncHttpClient:
    def __init__(
        self,
        timeout_sec: float = 60,
        retry_limit: int = 0,
        retry_delay_sec: float = 0,
        print_error: bool = True,
    ):
        self.retry_limit = retry_limit
        self.retry_delay_sec = retry_delay_sec
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)
        self.headers = {}
        self.print_error = print_error

    def set_headers(self, headers: dict):
        for k, v in headers.items():
            if self.headers.get(k) is not None:
                raise ValueError(f"Header {k} already set")
            self.headers[k] = v

    async def get_text(
        self,
        url: str,
        headers: dict | None = None,
        attr: dict | None = None,
        print_error: bool | None = None,
        retry_limit: int | None = None,
        retry_delay_sec: float | None = None,
    ) -> str:
        return await self.fetch(
            method="GET",
            url=url,
            headers=headers,
            return_type=ReturnType.TEXT,
            attr=attr,
            print_error=print_error,
            retry_limit=retry_limit,
            retry_delay_sec=retry_delay_sec,
        )

    async def get_json(
        self,
        url: str,
        headers: dict | None = None,
        attr: dict | None = None,
        print_error: bool | None = None,
        retry_limit: int | None = None,
        retry_delay_sec: float | None = None,
    ) -> Any:
        return await self.fetch(
            method="GET",
            url=url,
            headers=headers,
            return_type=ReturnType.JSON,
            attr=attr,
            print_error=print_error,
            retry_limit=retry_limit,
            retry_delay_sec=retry_delay_sec,
        )

    async def get_bytes(
        self,
        url: str,
        headers: dict | None = None,
        attr: dict | None = None,
        print_error: bool | None = None,
        retry_limit: int | None = None,
        retry_delay_sec: float | None = None,
    ) -> bytes:
        return await self.fetch(
            method="GET",
            url=url,
            headers=headers,
            return_type=ReturnType.RAW,
            attr=attr,
            print_error=print_error,
            retry_limit=retry_limit,
            retry_delay_sec=retry_delay_sec,
        )

    async def head(self, url: str, headers: dict | None = None, attr: dict | None = None) -> int:
        """Returns the response status code; error statuses are returned, not raised."""
        return await self.fetch(
            method="HEAD",
            url=url,
            headers=headers,
            return_type=ReturnType.STATUS,
            attr=attr,
            print_error=False,
            retry_limit=0,
        )

    async def fetch(
        self,
        method: str,
        url: str,
        return_type: ReturnType,
        headers: dict | None = None,
        attr: dict | None = None,
        print_error: bool | None = None,
        retry_limit: int | None = None,
        retry_delay_sec: float | None = None,
    ) -> Any:
        req_headers = self.headers
        if headers is not None:
            req_headers = self.headers.copy()
            for key, value in headers.items():
                req_headers[key] = value

        req_print_error = print_error if print_error is not None else self.print_error
        req_retry_limit = retry_limit if retry_limit is not None else self.retry_limit
        req_retry_delay_sec = retry_delay_sec if retry_delay_sec is not None else self.retry_delay_sec

        for retry_cnt in range(req_retry_limit + 1):
            start = asyncio.get_event_loop().time()
            try:
                return await request(
                    method=method,
                    url=url,
                    return_type=return_type,
                    headers=req_headers,
                    timeout=self.timeout,
                )
            except Exception as ex:
                err = error_dict(ex)
                err["url"] = url
                err["retry_cnt"] = retry_cnt
                err["duration"] = round(asyncio.get_event_loop().time() - start, 2)
                if isinstance(ex, HttpRequestError):
                    err["status"] = ex.status
                    err["method"] = ex.method
                    err["reason"] = ex.reason
                if attr is not None:
                    for k, v in attr.items():
                        err[k] = v

                if req_retry_limit == 0:
                    if req_print_error:
                        log.error("Failed to request", err)
                    raise
                if retry_cnt == req_retry_limit:
                    if req_print_error:
                        log.error("Failed to request: Retry Limit Exceeded", err)
                    raise

                if req_print_error:
                    err.pop("stacktrace", None)
                    log.debug("Retry request", err)

                if req_retry_delay_sec > 0:
                    await asyncio.sleep(req_retry_delay_sec)


async def request(
    method: str,
    url: str,
    headers: dict,
    return_type: ReturnType,
    timeout: ClientTimeout = ClientTimeout(total=60),
) -> Any:
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.request(method=method, url=url, headers=headers, allow_redirects=True) as res:
            if return_type == ReturnType.STATUS:
                return res.status
            if res.status >= 400:
                raise HttpRequestError.from_response("Failed to request", res)
            if return_type == ReturnType.TEXT:
                return await res.text()
            elif return_type == ReturnType.JSON:
                return await res.json(content_type=None)
            elif return_type == ReturnType.RAW:
                return await res.read()
            else:
                raise ValueError(f"Invalid return type: {return_type}")
