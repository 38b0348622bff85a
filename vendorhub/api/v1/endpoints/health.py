"""Health check endpoint; reports whether the cache is reachable."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import get_cache
from vendorhub.infrastructure.cache import CacheProtocol
from vendorhub.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> HealthResponse:
    """Return ok; the service keeps serving from the database when the cache is down."""
    available = cache is not None and cache.is_available()
    return HealthResponse(cache="available" if available else "unavailable")
