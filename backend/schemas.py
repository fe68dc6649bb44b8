from typing import Any, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt


class DeliveryCustomizationRequest(BaseModel):
    functionId: str = Field(..., description="ID of the deployed delivery function")
    zip: str = Field(..., description="Postal code the message applies to")
    message: str = Field(..., description="Text appended to delivery option titles")


class PaymentCustomizationRequest(BaseModel):
    functionId: str = Field(..., description="ID of the deployed payment function")
    paymentMethod: str = Field(..., description="Name of the payment method to hide")
    cartTotal: Union[StrictInt, StrictFloat, str] = Field(
        ..., description="Cart total above which the payment method is hidden"
    )


class ErrorResponse(BaseModel):
    error: Any


class ProductCountResponse(BaseModel):
    count: int


class ProductCreateResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
