"""Articles API — Home Route (plain-text welcome message)."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Home"])


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Welcome Message",
    description="Welcome Message",
)
async def home_page() -> str:
    return "Welcome to home page"
