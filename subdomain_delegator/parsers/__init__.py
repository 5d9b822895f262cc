"""
Request parsers.

This package turns incoming invocation payloads into validated requests.
"""

from .request_parser import parse_request, request_from_cloudformation

__all__ = ["parse_request", "request_from_cloudformation"]
