"""
Error taxonomy for the search tools. Inner components raise these; the dispatcher
is the only place they are caught and turned into error results.
"""
from typing import Optional


class SearchToolError(Exception):
    """Base class for every failure a tool invocation can report."""


class InvalidArguments(SearchToolError):
    """Malformed or missing tool parameters. Raised before any network effect."""


class RateLimitExceeded(SearchToolError):
    """Local quota guard tripped (per-second or per-day cap)."""


class UnknownTool(SearchToolError):
    """Dispatch name is not one of the registered tools."""


class TransportError(SearchToolError):
    """Upstream answered with a non-success HTTP status, or could not be reached."""

    def __init__(self, status_code: Optional[int], reason: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        if status_code is None:
            message = f"Google API request failed: {reason}"
        else:
            message = f"Google API error: {status_code} {reason}".rstrip()
        if body:
            message = f"{message}\n{body}"
        super().__init__(message)


class UpstreamApiError(SearchToolError):
    """Upstream reported a structured error object despite a success status."""

    def __init__(self, code: Optional[int], message: str) -> None:
        self.code = code
        self.message = message
        if code is None:
            super().__init__(f"Google API error: {message}")
        else:
            super().__init__(f"Google API error: {code} {message}")
