from .chaturbate_fetcher import ChaturbateFetcher, ChatVideoContext
from .edge_resolver import EDGE_REGIONS, find_working_edge_url, parse_edge_region
from .errors import StreamError, PrivateStreamError, ChannelOfflineError, GeoBlockedError
