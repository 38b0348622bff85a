"""Response envelopes shared by every endpoint.

Success responses are {"success": true, "data": ...}; paginated listings
add a "pagination" object. Failures use VendorHubException.to_dict().
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from vendorhub.application.dtos.pagination import Page, Pagination

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success envelope around a single payload."""

    success: bool = True
    data: T


class PageEnvelope(BaseModel, Generic[T]):
    """Success envelope around one page of a listing."""

    success: bool = True
    data: list[T]
    pagination: Pagination


def ok(data: Any) -> dict[str, Any]:
    """Wrap data in the success envelope."""
    return {"success": True, "data": data}


def paginated(page: Page[Any]) -> dict[str, Any]:
    """Wrap a Page in the paginated success envelope."""
    return {"success": True, "data": page.items, "pagination": page.pagination}
