"""
Exceptions raised by the Paperless API client.
"""

from typing import Optional


class PaperlessError(Exception):
    """Base exception for Paperless client errors."""
    pass


class PaperlessConnectionError(PaperlessError):
    """Failed to connect to Paperless."""
    pass


class PaperlessAPIError(PaperlessError):
    """API returned an error response."""
    def __init__(self, status_code: int, message: str, response_body: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.response_body = response_body
        super().__init__(f"Paperless API error {status_code}: {message}")


class PaperlessDecodeError(PaperlessError):
    """Response body was not valid JSON or did not have the expected shape."""
    pass


class PaperlessProtocolError(PaperlessError):
    """Server sent data that violates the API contract."""
    pass


class UnknownRuleTypeError(PaperlessProtocolError):
    """Saved view filter rule with a rule_type this client does not know."""
    def __init__(self, rule_type: int):
        self.rule_type = rule_type
        super().__init__(f"Invalid rule_type {rule_type}")
