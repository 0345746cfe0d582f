import json
import logging
from typing import List, Sequence, Union
import httpx
from pydantic import ValidationError
from app.core.config import settings
from app.core.errors import MalformedRequest, NoTargets
from app.fetch.base import FetchOutcome, FetchSuccess, render_outcome
from app.fetch.dispatcher import dispatch
from app.schemas import FanOutRequest, FanOutResponse

logger = logging.getLogger(__name__)

def parse_request_body(raw_body: Union[bytes, str]) -> List[str]:
    """
    Decode a request body into the list of target URLs.

    A missing "urls" field, or one that is not a list of strings, counts as
    an empty list and is rejected with NoTargets like an explicit [].
    """
    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise MalformedRequest("Invalid JSON format.") from e

    if not isinstance(payload, dict):
        raise MalformedRequest("Invalid JSON format.")

    try:
        urls = FanOutRequest.model_validate(payload).urls
    except ValidationError:
        urls = []

    if not urls:
        logger.warning("No URLs provided in the request.")
        raise NoTargets("No URLs provided.")

    return urls

def collect_results(outcomes: Sequence[FetchOutcome]) -> FanOutResponse:
    """Encode outcomes, in order, into the response body."""
    return FanOutResponse(results=[render_outcome(outcome) for outcome in outcomes])

async def process_fanout_request(client: httpx.AsyncClient, raw_body: Union[bytes, str]) -> FanOutResponse:
    """
    Main pipeline for a fan-out request.

    1. Parse and validate the body (errors stop here, nothing is fetched)
    2. Fetch every URL concurrently through the shared client
    3. Collect outcomes into the ordered results list
    """
    urls = parse_request_body(raw_body)
    logger.info(f"Processing request with {len(urls)} URLs")

    outcomes = await dispatch(client, urls, batch_timeout=settings.BATCH_TIMEOUT)

    failed = sum(1 for outcome in outcomes if not isinstance(outcome, FetchSuccess))
    logger.info(f"Successfully processed all URLs ({len(urls) - failed} fetched, {failed} failed)")

    return collect_results(outcomes)
