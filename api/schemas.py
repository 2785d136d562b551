from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    configured: bool
