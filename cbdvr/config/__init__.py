from .config_record import RecordConfig, read_record_config
from .config_request import RequestConfig, read_request_config
from .env import Env, get_env
