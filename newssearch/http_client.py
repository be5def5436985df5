"""Shared HTTP client with a default timeout on every outbound request."""

import requests
from requests.adapters import HTTPAdapter

USER_AGENT = "newssearch/0.1.0"

_session: requests.Session | None = None


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout when the caller passes none."""

    def __init__(self, *args, timeout: float = 10.0, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def build_session(timeout: float = 10.0) -> requests.Session:
    """Return a requests.Session with no retries and a default timeout."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    adapter = TimeoutHTTPAdapter(timeout=timeout, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use.

    The session uses the default adapter timeout; callers that need a
    different one pass `timeout=` per request.
    """
    global _session
    if _session is None:
        _session = build_session()
    return _session
