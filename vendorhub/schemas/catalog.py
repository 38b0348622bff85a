"""Attribute, brand, size and category API schemas."""

from pydantic import BaseModel, Field


class AttributeCreate(BaseModel):
    """Request body for creating an attribute."""

    name: str = Field(..., min_length=1, max_length=120)
    is_active: bool = True


class AttributeUpdate(BaseModel):
    """Request body for updating an attribute (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    is_active: bool | None = None


class BrandCreate(BaseModel):
    """Request body for creating a brand."""

    name: str = Field(..., min_length=1, max_length=120)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_keywords: str | None = Field(default=None, max_length=500)
    meta_description: str | None = None
    is_active: bool = True


class BrandUpdate(BaseModel):
    """Request body for updating a brand (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_keywords: str | None = Field(default=None, max_length=500)
    meta_description: str | None = None
    is_active: bool | None = None


class SizeCreate(BaseModel):
    """Request body for creating a size."""

    label: str = Field(..., min_length=1, max_length=60)
    value: str = Field(..., min_length=1, max_length=60)
    is_active: bool = True


class SizeUpdate(BaseModel):
    label: str | None = Field(default=None, min_length=1, max_length=60)
    value: str | None = Field(default=None, min_length=1, max_length=60)
    is_active: bool | None = None


class ParentCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    is_active: bool = True


class ParentCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    is_active: bool | None = None


class PrimaryCategoryCreate(ParentCategoryCreate):
    parent_category_id: str = Field(..., min_length=1)


class PrimaryCategoryUpdate(ParentCategoryUpdate):
    parent_category_id: str | None = Field(default=None, min_length=1)


class SecondaryCategoryCreate(PrimaryCategoryCreate):
    primary_category_id: str = Field(..., min_length=1)
    attribute_ids: list[str] = Field(default_factory=list, max_length=100)


class SecondaryCategoryUpdate(PrimaryCategoryUpdate):
    primary_category_id: str | None = Field(default=None, min_length=1)
    attribute_ids: list[str] | None = Field(default=None, max_length=100)
