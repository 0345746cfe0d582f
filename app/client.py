"""
Blocking client for callers that cannot run asynchronous code.

One POST carries the whole batch; the service does the concurrent work.
"""
import logging
from typing import Iterable, List, Optional
import requests
from app.core.config import settings

logger = logging.getLogger(__name__)

_USER_AGENT = "Plugin-Agent/1.0"

class FanOutClientError(Exception):
    pass

class FanOutClient:
    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[float] = None):
        self.endpoint = endpoint or settings.FANOUT_ENDPOINT
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": _USER_AGENT})

    def fetch_all(self, urls: Iterable[str]) -> List[str]:
        """
        Fetch all URLs through the service.

        Returns one string per URL in input order: the body, or the service's
        error description for that URL. Any non-200 answer is fatal.
        """
        payload = {"urls": list(urls)}
        try:
            resp = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise FanOutClientError(f"An error occurred: {e}") from e

        if resp.status_code != 200:
            raise FanOutClientError(f"Function call failed with status code: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise FanOutClientError(f"Invalid response from fan-out service: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise FanOutClientError("Response is missing the results list")

        return [str(item) for item in results]

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
