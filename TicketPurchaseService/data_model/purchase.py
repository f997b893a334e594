from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PurchaseRequest(BaseModel):
    """
    Request model for a ticket purchase.

    The buyer provides their name, email and the gig they want a ticket for.
    The system will:
    - Generate a ticket id
    - Publish the purchase to SQS
    - Acknowledge with the ticket id
    """
    name: str = Field(..., min_length=1, description="Name of the ticket holder")
    email: str = Field(..., min_length=1, description="Email the ticket is sent to")
    gigId: str = Field(..., min_length=1, description="Identifier of the gig")

    @field_validator('name', 'email', 'gigId')
    def validate_not_blank(cls, v):
        """Reject whitespace-only values and trim the rest."""
        if not v.strip():
            raise ValueError("Value cannot be empty or whitespace")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ada",
                "email": "ada@example.com",
                "gigId": "gig-42"
            }
        }
    )


class PurchaseRecord(BaseModel):
    """
    Purchase record that gets published to the queue.

    Exactly the buyer's fields plus the freshly minted ticket id.
    """
    name: str
    email: str
    gigId: str
    ticketId: str = Field(..., description="Unique ticket identifier (uuid4)")


class PurchaseAcknowledgement(BaseModel):
    """
    Response model for a purchase accepted for asynchronous processing.
    """
    ticketId: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """
    Error body returned for rejected or failed purchases.
    """
    error: str
    details: Optional[List[FieldError]] = None
