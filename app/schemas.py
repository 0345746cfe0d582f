from pydantic import BaseModel, Field
from typing import List

class FanOutRequest(BaseModel):
    urls: List[str] = Field(default_factory=list, description="Target URLs, fetched concurrently")

class FanOutResponse(BaseModel):
    results: List[str] = Field(
        default_factory=list,
        description="Fetched body or error string for each URL, in request order"
    )
