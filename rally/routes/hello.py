"""
Root greeting route.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Hello"])


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def hello() -> str:
    return "Hello"
