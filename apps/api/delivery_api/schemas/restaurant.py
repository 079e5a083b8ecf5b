"""
Restaurant Pydantic schemas for API request/response models.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RestaurantCreate(BaseModel):
    """Request model for registering a restaurant on behalf of an owner."""
    name: str = Field(min_length=1, max_length=255)
    category_id: UUID
    owner_id: UUID
    address: Optional[str] = Field(default=None, max_length=255)


class RestaurantUpdate(BaseModel):
    """Full replacement of the editable restaurant fields."""
    name: str = Field(min_length=1, max_length=255)
    category_id: UUID
    address: Optional[str] = Field(default=None, max_length=255)


class RestaurantResponse(BaseModel):
    """Response model for a restaurant. ``average_rating`` is null without reviews."""
    id: UUID
    name: str
    category_id: UUID
    owner_id: UUID
    address: Optional[str] = None
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)
