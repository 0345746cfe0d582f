import logging
import httpx
from app.core.config import settings
from app.fetch.base import FetchFailure, FetchOutcome, FetchSuccess

logger = logging.getLogger(__name__)

def create_http_client() -> httpx.AsyncClient:
    """
    Build the client shared by every fetch for the lifetime of the process.

    Waiting for a free pooled connection is not timed out here; the batch
    deadline bounds it instead.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.REQUEST_TIMEOUT, pool=None),
        limits=httpx.Limits(max_connections=settings.MAX_CONNECTIONS),
        follow_redirects=settings.FOLLOW_REDIRECTS,
    )

async def fetch_url(client: httpx.AsyncClient, url: str) -> FetchOutcome:
    """
    GET a single URL and return its body as an outcome.

    Never raises for problems with the target itself: bad URLs, transport
    errors, timeouts and non-2xx statuses all come back as FetchFailure.
    """
    try:
        target = httpx.URL(url)
    except Exception as e:
        # InvalidURL, or UnicodeEncodeError for strings that are not valid UTF-8
        return _failure(url, f"Invalid URL: {e}")

    if target.scheme not in ("http", "https"):
        return _failure(url, "URL must start with http:// or https://")

    try:
        logger.info(f"Fetching data from URL: {url}")
        response = await client.get(target, headers={"User-Agent": settings.USER_AGENT})
        response.raise_for_status()
        return FetchSuccess(url=url, status_code=response.status_code, body=response.text)
    except httpx.TimeoutException as e:
        return _failure(url, f"Timeout while fetching ({type(e).__name__})")
    except httpx.HTTPStatusError as e:
        return _failure(url, f"HTTP error {e.response.status_code} {e.response.reason_phrase}".rstrip())
    except Exception as e:
        return _failure(url, str(e) or type(e).__name__)

def _failure(url: str, message: str) -> FetchFailure:
    logger.warning(f"Failed to fetch data from URL: {url}: {message}")
    return FetchFailure(url=url, message=message)
