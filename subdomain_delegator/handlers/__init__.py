"""
Invocation handlers.

This package contains the transports that deliver requests to the
delegation manager and send its outcomes back.
"""

from .cloudformation import lambda_handler

__all__ = ["lambda_handler"]
