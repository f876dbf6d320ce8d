from __future__ import annotations
from pydantic import BaseModel, Field
import time


class ErrorInfo(BaseModel):
    """Simple error information, attached to fallback results."""

    code: str = Field(
        ..., description="Error code like 'provider_error', 'missing_client', etc."
    )
    message: str = Field(..., description="Human-readable error message")
    category: str = Field(
        ..., description="Error category: 'client', 'server', 'network', 'parsing'"
    )
    timestamp: int = Field(
        default_factory=lambda: int(time.time() * 1000),
        description="Unix timestamp in milliseconds",
    )

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"[{self.timestamp}] {self.category.upper()} - {self.code}: {self.message}"

    @classmethod
    def from_exception(cls, exc: BaseException, code: str, category: str) -> ErrorInfo:
        """
        Build from an exception; when exc wraps a cause, the cause's type is included.
        """
        cause = getattr(exc, "cause", None) or exc.__cause__
        message = str(exc)
        if cause is not None and type(cause).__name__ not in message:
            message = f"{message} ({type(cause).__name__})"
        return cls(code=code, message=message, category=category)
