"""
Error handling utilities for consistent error message extraction.
"""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract a loggable message from an unknown error type.

    Exceptions without a message (``asyncio.TimeoutError()`` is the
    usual offender) fall back to their class name.
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
