"""
HTTP response envelope shared by the serverless endpoints.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

# Filter catalogs change rarely: long shared cache, revalidated in the background
CATALOG_CACHE_CONTROL = "s-maxage=86400, stale-while-revalidate"

# Random picks and errors must never be cached
NO_STORE_CACHE_CONTROL = "no-cache, no-store, must-revalidate"


class ApiResponse(BaseModel):
    """Status code, JSON body and cache directive of one response."""

    status_code: int = Field(..., ge=100, le=599)
    body: Any = None
    cache_control: str = NO_STORE_CACHE_CONTROL

    @classmethod
    def ok(cls, body: Any, *, cache_control: str = NO_STORE_CACHE_CONTROL) -> "ApiResponse":
        return cls(status_code=200, body=body, cache_control=cache_control)

    @classmethod
    def error(cls, status_code: int, message: str) -> "ApiResponse":
        return cls(status_code=status_code, body={"message": message})

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Cache-Control": self.cache_control,
        }

    @property
    def message(self) -> str | None:
        """Error message, when the body is an error envelope."""
        if isinstance(self.body, dict):
            return self.body.get("message")
        return None

    def to_lambda(self) -> dict[str, Any]:
        """Render as an API Gateway proxy integration response."""
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": json.dumps(self.body, ensure_ascii=False, default=str),
            "isBase64Encoded": False,
        }
