"""Response envelopes shared by the profile routes."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every non-2xx response raised by the application."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Confirmation for operations that return no resource."""

    message: str
