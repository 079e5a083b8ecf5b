"""
Menu Pydantic schemas for API request/response models.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MenuCreate(BaseModel):
    restaurant_id: UUID
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: int = Field(ge=0)
    is_hidden: bool = False


class MenuUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    is_hidden: Optional[bool] = None


class MenuResponse(BaseModel):
    id: UUID
    restaurant_id: UUID
    name: str
    description: Optional[str] = None
    price: int

    model_config = ConfigDict(from_attributes=True)
