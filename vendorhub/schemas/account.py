"""Vendor and user API schemas. Password hashes are accepted, never returned."""

from pydantic import BaseModel, Field


class VendorCreate(BaseModel):
    """Request body for registering a vendor."""

    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=255)
    store_name: str = Field(..., min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)
    password_hash: str | None = Field(default=None, max_length=255)
    is_verified: bool = False


class VendorUpdate(BaseModel):
    """Request body for updating a vendor (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    store_name: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)
    password_hash: str | None = Field(default=None, max_length=255)
    is_verified: bool | None = None


class UserCreate(BaseModel):
    """Request body for registering a user."""

    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    password_hash: str | None = Field(default=None, max_length=255)


class UserUpdate(BaseModel):
    """Request body for updating a user (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    password_hash: str | None = Field(default=None, max_length=255)
