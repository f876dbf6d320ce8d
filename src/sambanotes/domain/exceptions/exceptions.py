from __future__ import annotations


class SambaNotesError(Exception):
    """Base class for all sambanotes exceptions."""

    pass


class InvalidRequest(SambaNotesError):
    """
    Malformed input: bad encoding tag, unsupported document type, unknown model,
    or a provider family with no configured client.
    Raised before any provider call is made.
    """

    pass


class DocumentTooLarge(SambaNotesError):
    """
    The encoded document exceeds the resolved model's ceiling and truncation is disabled.
    """

    def __init__(self, model: str, size: int, limit: int):
        self.model: str = model
        self.size: int = size
        self.limit: int = limit
        super().__init__(
            f"Encoded document is {size} characters; {model} accepts at most {limit}."
        )


class ProviderCallFailed(SambaNotesError):
    """
    Transport or provider-side failure. The original exception is kept on `cause`
    (and chained as __cause__).
    """

    def __init__(self, provider: str, model: str, cause: BaseException):
        self.provider: str = provider
        self.model: str = model
        self.cause: BaseException = cause
        super().__init__(
            f"{provider} call for model {model} failed: {type(cause).__name__}: {cause}"
        )
