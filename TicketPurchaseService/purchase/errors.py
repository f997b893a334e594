from typing import Dict, List, Optional


class PurchaseError(Exception):
    """
    Base class for purchase failures.

    Carries the HTTP status the failure maps to and a message that is safe
    to show to the caller.
    """
    status_code = 500

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MalformedBodyError(PurchaseError):
    """Request body could not be deserialized."""
    status_code = 400


class PurchaseValidationError(PurchaseError):
    """Request body deserialized but has missing or malformed fields."""
    status_code = 400


class PublishFailureError(PurchaseError):
    """Valid purchase could not be enqueued."""
    status_code = 500
