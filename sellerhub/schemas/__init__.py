"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetReferencePayload(BaseModel):
    url: str = Field(..., min_length=1, max_length=1000)
    remote_id: Optional[str] = Field(default=None, max_length=100)
    path: str = Field(default="", max_length=500)

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    seller_id: str = Field(..., min_length=1, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    photos: list[AssetReferencePayload] = Field(default_factory=list)


class ProductPhotosUpdate(BaseModel):
    photos: list[AssetReferencePayload] = Field(default_factory=list)


class ProductResponse(BaseModel):
    id: str
    seller_id: str
    name: str
    photos: list[AssetReferencePayload]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LogoBase64Upload(BaseModel):
    logo_base64: str = Field(..., min_length=1)
    file_name: Optional[str] = Field(default=None, max_length=255)


class LogoResponse(BaseModel):
    url: str
    remote_id: Optional[str] = None
    path: str = ""
    version: int
    updated_at: Optional[datetime] = None


class LogoUploadResponse(BaseModel):
    url: str
    remote_id: str
    path: str
    name: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    version: int


class LogoDeleteResponse(BaseModel):
    deleted_url: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
