FIREFOX_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0"


def get_headers(
    user_agent: str | None = None,
    cookies: str | None = None,
    accept: str | None = None,
) -> dict:
    headers = {
        "User-Agent": user_agent or FIREFOX_USER_AGENT,
    }
    if accept is not None:
        headers["Accept"] = accept
    if cookies is not None:
        headers["Cookie"] = cookies
    return headers
