import json
from typing import Any, Dict

from pydantic import BaseModel, Field

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


class ApiResponse(BaseModel):
    """
    Transport-neutral response produced by the purchase handler.
    """
    status_code: int
    headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    body: Dict[str, Any]

    def to_lambda_proxy(self) -> Dict[str, Any]:
        """Render as an API Gateway Lambda proxy integration response."""
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": json.dumps(self.body),
        }
