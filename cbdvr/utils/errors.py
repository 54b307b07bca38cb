from aiohttp import ClientResponse


class HttpRequestError(Exception):
    """Raised for an HTTP response with an error status."""

    def __init__(
        self,
        message: str,
        status: int,
        url: str | None = None,
        method: str | None = None,
        reason: str | None = None,
    ):
        super().__init__(f"{message}: {status} {method} {url}")
        self.status = status
        self.url = url
        self.method = method
        self.reason = reason

    @classmethod
    def from_response(cls, message: str, res: ClientResponse) -> "HttpRequestError":
        return cls(message, res.status, str(res.url), res.method, res.reason)
