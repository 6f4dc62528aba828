"""Error kinds raised by the core.

Errors are raised where they are detected and translated to HTTP responses only at the API
boundary (`string_analyzer.api.errors`). Nothing in the core retries or recovers.
"""

from __future__ import annotations


class StringAnalyzerError(Exception):
    """Base class for all classified errors."""


class InvalidInputError(StringAnalyzerError, ValueError):
    """Raised for malformed request input (missing field, blank or numeric value, bad number)."""


class InvalidTypeError(InvalidInputError):
    """Raised when a request field has the wrong type (e.g. `value` is not a string)."""


class QueryParseError(StringAnalyzerError, ValueError):
    """Raised when a natural-language query contains no recognized keyword."""


class NotFoundError(StringAnalyzerError, LookupError):
    """Raised when a lookup or deletion matches no stored string."""


class ConflictError(StringAnalyzerError):
    """Raised when creating a string that already exists."""
