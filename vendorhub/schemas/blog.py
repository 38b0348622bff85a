"""Blog API schemas."""

from datetime import date

from pydantic import BaseModel, Field


class BlogCreate(BaseModel):
    """Request body for publishing a blog post."""

    heading: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=120)
    author: str = Field(..., min_length=1, max_length=120)
    published_on: date | None = None
    vendor_id: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_keywords: str | None = Field(default=None, max_length=500)
    meta_description: str | None = None


class BlogUpdate(BaseModel):
    """Request body for editing a blog post (partial); the owner cannot change."""

    heading: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=120)
    author: str | None = Field(default=None, min_length=1, max_length=120)
    published_on: date | None = None
    image_url: str | None = Field(default=None, max_length=500)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_keywords: str | None = Field(default=None, max_length=500)
    meta_description: str | None = None
