"""DTOs for blog posts."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class BlogResult:
    """Blog post read-model. vendor_id is None for marketplace posts."""

    id: str
    heading: str
    description: str
    category: str
    author: str
    published_on: date
    vendor_id: str | None = None
    image_url: str | None = None
    meta_title: str | None = None
    meta_keywords: str | None = None
    meta_description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
