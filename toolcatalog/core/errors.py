"""
Error types raised by the search engine.

Only InvalidInput and MalformedConditions reach callers; the natural-language
pipeline recovers from ExternalServiceError by falling back to keyword
splitting.
"""


class InvalidInput(ValueError):
    """Raised when a search query is empty or whitespace-only."""
    pass


class ExternalServiceError(Exception):
    """Raised when the language-understanding service call fails.

    Covers transport errors, timeouts, non-2xx responses, unparsable bodies
    and responses that do not match the SearchIntent schema.
    """
    pass


class MalformedConditions(ValueError):
    """Raised when advanced search conditions are invalid (e.g. min > max)."""
    pass
