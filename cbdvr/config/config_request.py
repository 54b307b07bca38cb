import os

from pydantic import BaseModel, constr, confloat

DEFAULT_DOMAIN = "https://chaturbate.com/"


class RequestConfig(BaseModel):
    domain: constr(min_length=1)
    cookies: constr(min_length=1) | None
    user_agent: constr(min_length=1) | None
    timeout_sec: confloat(gt=0)


def read_request_config() -> RequestConfig:
    return RequestConfig(
        domain=os.getenv("CB_DOMAIN") or DEFAULT_DOMAIN,
        cookies=os.getenv("CB_COOKIES") or None,
        user_agent=os.getenv("CB_USER_AGENT") or None,
        timeout_sec=os.getenv("CB_TIMEOUT_SEC") or 10,  # type: ignore
    )
