from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Gig(BaseModel):
    """
    Gig item from the DynamoDB gig table.

    Only the key is fixed; every other attribute is passed through.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Gig identifier (table partition key)")


class GigListResponse(BaseModel):
    """
    Response model for the gig listing.
    """
    gigs: List[Gig]
    count: int
