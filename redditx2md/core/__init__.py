"""
Core domain models and text handling.

This package contains data types, the error taxonomy and the content
cleaner, none of which depend on a specific pipeline stage.
"""

from .cleaner import clean_content
from .errors import (
    AuthError,
    ErrorKind,
    ForbiddenError,
    NetworkError,
    RateLimitError,
    Redditx2mdError,
    RequestTimeoutError,
    ServerError,
)
from .types import (
    EMPTY_SUMMARY_FALLBACK,
    NO_CONTENT_FALLBACK,
    NO_SELFTEXT_SUMMARY,
    ProcessedPost,
    RawPost,
    SaveResult,
)

__all__ = [
    "clean_content",
    "ErrorKind",
    "Redditx2mdError",
    "RateLimitError",
    "ForbiddenError",
    "RequestTimeoutError",
    "AuthError",
    "ServerError",
    "NetworkError",
    "RawPost",
    "ProcessedPost",
    "SaveResult",
    "NO_CONTENT_FALLBACK",
    "NO_SELFTEXT_SUMMARY",
    "EMPTY_SUMMARY_FALLBACK",
]
