from dataclasses import dataclass
from typing import Union

@dataclass(frozen=True)
class FetchSuccess:
    url: str
    status_code: int
    body: str

@dataclass(frozen=True)
class FetchFailure:
    url: str
    message: str

FetchOutcome = Union[FetchSuccess, FetchFailure]

def render_outcome(outcome: FetchOutcome) -> str:
    """Project an outcome onto the string returned to the caller."""
    if isinstance(outcome, FetchSuccess):
        return outcome.body
    return f"Error fetching data from {outcome.url}: {outcome.message}"
