"""
Utility helpers shared across the resourcefinder package.
"""

from .retry import (
    RetryConfig,
    TRANSIENT_REQUEST_ERRORS,
    call_with_backoff
)

__all__ = [
    'RetryConfig',
    'TRANSIENT_REQUEST_ERRORS',
    'call_with_backoff'
]
