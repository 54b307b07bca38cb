from .error import error_dict
from .errors import HttpRequestError
from .format import format_filesize
from .http import FIREFOX_USER_AGENT, get_headers
from .http_async import AsyncHttpClient, ReturnType
from .logger import Logger, log
from .streamlink import disable_streamlink_log
