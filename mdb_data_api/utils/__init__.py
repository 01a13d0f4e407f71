"""
Utility functions and helpers for MDB Data API.

This module provides utility functions used across the MDB Data API codebase.
"""

from .http import redact_headers, serialize_http_error
from .mongo import encode_payload

__all__ = ["encode_payload", "redact_headers", "serialize_http_error"]
