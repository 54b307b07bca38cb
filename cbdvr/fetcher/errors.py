class StreamError(Exception):
    pass


class PrivateStreamError(StreamError):
    def __init__(self, username: str):
        super().__init__(f"Channel is in a private show: {username}")
        self.username = username


class ChannelOfflineError(StreamError):
    def __init__(self, username: str):
        super().__init__(f"Channel is offline: {username}")
        self.username = username


class GeoBlockedError(StreamError):
    def __init__(self, hls_source: str):
        super().__init__(f"No reachable edge region for stream: {hls_source}")
        self.hls_source = hls_source
