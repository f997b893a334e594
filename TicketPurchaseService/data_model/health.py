from pydantic import BaseModel

class HealthResponse(BaseModel):
    """
    Health check response model.
    """
    status: str
    service: str
    queue_configured: bool
    gig_table_configured: bool
    timestamp: str
