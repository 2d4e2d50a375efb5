"""Exceptions raised by collaborators and caught at the pipeline boundary."""

AI_PROCESSING_FAILED = "AI_PROCESSING_FAILED"
NO_JSON_OBJECT = "NO_JSON_OBJECT"
INVALID_JSON = "INVALID_JSON"
SCHEMA_MISMATCH = "SCHEMA_MISMATCH"
DOCUMENT_CONVERSION_FAILED = "DOCUMENT_CONVERSION_FAILED"
RESUME_TEXT_TOO_SHORT = "RESUME_TEXT_TOO_SHORT"


class ExtractionFailure(Exception):
    """Terminal failure for one resume: no profile is produced."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class RateLimitExceeded(Exception):
    """Raised when a client exceeds its request window."""

    def __init__(self, limit: int, window: float, retry_after: int):
        self.limit = limit
        self.window = window
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded: {limit} requests per {window:g} seconds. "
            f"Retry after {retry_after} seconds."
        )
