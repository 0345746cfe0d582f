import asyncio
import logging
from typing import List, Optional, Sequence
import httpx
from app.core.errors import BatchTimeout, DispatchFailure
from app.fetch.base import FetchOutcome
from app.fetch.fetcher import fetch_url

logger = logging.getLogger(__name__)

async def dispatch(
    client: httpx.AsyncClient,
    urls: Sequence[str],
    batch_timeout: Optional[float] = None
) -> List[FetchOutcome]:
    """
    Fetch every URL concurrently and wait for all of them to finish.

    The returned list is positional: outcome i belongs to urls[i] whatever
    order the fetches completed in. When a positive batch_timeout (seconds) elapses
    first, every in-flight fetch is cancelled and BatchTimeout is raised.
    """
    logger.info(f"Fanning out {len(urls)} fetches")

    tasks: List[asyncio.Future] = []
    try:
        for url in urls:
            tasks.append(asyncio.ensure_future(fetch_url(client, url)))
    except Exception as e:
        for task in tasks:
            task.cancel()
        logger.exception("Could not schedule fetches")
        raise DispatchFailure(f"Could not schedule fetches: {e}") from e

    gathered = asyncio.gather(*tasks)
    try:
        if batch_timeout is not None and batch_timeout > 0:
            outcomes = await asyncio.wait_for(gathered, timeout=batch_timeout)
        else:
            outcomes = await gathered
    except asyncio.TimeoutError:
        logger.error(f"Batch of {len(urls)} fetches exceeded {batch_timeout}s, abandoning")
        raise BatchTimeout(f"Fetching did not complete within {batch_timeout} seconds")
    except Exception as e:
        # fetch_url contains target errors, so this is the runtime itself failing
        for task in tasks:
            task.cancel()
        logger.exception("Error during parallel execution of HTTP requests")
        raise DispatchFailure(f"Parallel execution failed: {e}") from e

    return list(outcomes)
