from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from delivery_api.models.enums import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    amount: int = Field(ge=0)
    method: PaymentMethod = PaymentMethod.CARD


class PaymentResponse(BaseModel):
    id: UUID
    order_id: UUID
    amount: int
    method: PaymentMethod
    status: PaymentStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
