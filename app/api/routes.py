import json
from typing import Any
import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.errors import FanOutError
from app.schemas import FanOutRequest, FanOutResponse
from app.services.fanout import process_fanout_request

router = APIRouter()

class EscapedJSONResponse(JSONResponse):
    """JSON with non-ASCII escaped, so lone surrogates from input URLs still encode"""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created at startup"""
    return request.app.state.http_client

# The body is read raw so decoding errors map to 400 rather than FastAPI's 422;
# the schema is declared here for the OpenAPI docs only.
@router.post(
    "/api/fanout",
    response_model=FanOutResponse,
    response_class=EscapedJSONResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": FanOutRequest.model_json_schema()}},
            "required": True,
        }
    },
)
async def fan_out(request: Request, client: httpx.AsyncClient = Depends(get_http_client)):
    """
    Fetch a batch of URLs concurrently.

    Accepts {"urls": [...]} and returns {"results": [...]} in the same order.
    A URL that cannot be fetched yields an error string in its slot instead of
    failing the request.
    """
    raw_body = await request.body()
    try:
        return await process_fanout_request(client, raw_body)
    except FanOutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": settings.SERVICE_NAME}
