import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, constr

from .config_record import RecordConfig, read_record_config
from .config_request import RequestConfig, read_request_config


class Env(BaseModel):
    env: constr(min_length=1)
    log_level: constr(min_length=1)
    record: RecordConfig
    req_conf: RequestConfig


def get_env() -> Env:
    env = os.getenv("PY_ENV") or None
    if env is None:
        env = "dev"
    if env == "dev":
        load_dotenv(Path.cwd() / "dev" / ".env")

    return Env(
        env=env,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        record=read_record_config(),
        req_conf=read_request_config(),
    )
