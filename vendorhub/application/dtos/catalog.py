"""DTOs for catalog and taxonomy entities: attributes, brands, sizes and categories."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NamedRef:
    """Flattened reference to a related entity embedded in another payload."""

    id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class AttributeResult:
    """Attribute read-model (e.g. Color, Size)."""

    id: str
    name: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class BrandResult:
    """Brand read-model with its SEO metadata."""

    id: str
    name: str
    is_active: bool
    meta_title: str | None = None
    meta_keywords: str | None = None
    meta_description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SizeResult:
    """Size option read-model."""

    id: str
    label: str
    value: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ParentCategoryResult:
    """Top-level category read-model."""

    id: str
    name: str
    is_active: bool
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PrimaryCategoryResult:
    """Second-level category read-model; embeds its parent."""

    id: str
    name: str
    is_active: bool
    parent_category: NamedRef | None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SecondaryCategoryResult:
    """Leaf category read-model; embeds parent, primary and its attributes."""

    id: str
    name: str
    is_active: bool
    parent_category: NamedRef | None
    primary_category: NamedRef | None
    attributes: list[NamedRef] = field(default_factory=list)
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DropdownResult:
    """Everything the category/attribute pickers need, in one payload."""

    parent_categories: list[ParentCategoryResult]
    primary_categories: list[PrimaryCategoryResult]
    secondary_categories: list[SecondaryCategoryResult]
    attributes: list[AttributeResult]
