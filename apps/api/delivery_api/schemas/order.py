"""
Order Pydantic schemas for API request/response models.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from delivery_api.models.enums import OrderStatus, OrderType


class OrderItemRequest(BaseModel):
    menu_id: UUID
    quantity: int = Field(ge=1, le=100)


class OrderCreate(BaseModel):
    restaurant_id: UUID
    order_type: OrderType = OrderType.DELIVERY
    delivery_address: Optional[str] = Field(default=None, max_length=255)
    request: Optional[str] = Field(default=None, max_length=500)
    items: List[OrderItemRequest] = Field(min_length=1)


class OrderItemResponse(BaseModel):
    menu_id: UUID
    quantity: int
    unit_price: int

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: UUID
    customer_id: UUID
    restaurant_id: UUID
    order_type: OrderType
    status: OrderStatus
    delivery_address: Optional[str] = None
    request: Optional[str] = None
    total_price: int
    items: List[OrderItemResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
