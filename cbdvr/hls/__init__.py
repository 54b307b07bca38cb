from .errors import PlaylistError, ResolutionNotFoundError
from .playlist import Stream, Playlist, Resolution, pick_playlist, parse_resolutions
from .segment_watcher import SegmentWatcher, SegmentHandler, WATCH_INTERVAL_SEC
from .utils import segment_seq, root_url_of, join_url, decode_playlist
