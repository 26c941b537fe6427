"""
transfer/failures.py - Failure message extraction

Turns whatever a transfer function raised (or reported) into the single
human-readable message shown in the FAILED state.
"""

from collections.abc import Mapping
from typing import Any, Optional

GENERIC_FAILURE_MESSAGE = "Unknown transfer error"
EMPTY_FAILURE_MESSAGE = "Empty error message"


def _message_field(value: Any) -> Optional[str]:
    """The non-empty `message` of an error-like object or mapping, if any."""
    if isinstance(value, Mapping):
        message = value.get("message")
    else:
        message = getattr(value, "message", None)
    if isinstance(message, str) and message:
        return message
    return None


def describe_failure(error: Any) -> str:
    """
    Convert a failure to a message.

    - plain strings are used as-is
    - exceptions give their message; an exception wrapping an error-like
      object gives that object's message
    - objects or mappings with a `message` field give that field
    - anything else gives a generic message
    """
    if isinstance(error, str):
        return error if error else EMPTY_FAILURE_MESSAGE

    if isinstance(error, BaseException):
        if len(error.args) == 1 and not isinstance(error.args[0], str):
            nested = _message_field(error.args[0])
            if nested:
                return nested
        message = str(error)
        return message if message else GENERIC_FAILURE_MESSAGE

    return _message_field(error) or GENERIC_FAILURE_MESSAGE


# ==================== Rejected results ====================

REJECTED_MESSAGE = "Transfer was rejected by the receiver"

# Flags a receiver may set to report that it did not accept the payload
_SUCCESS_FLAGS = ("success", "operation_success", "operationSuccess")


def _field(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def rejection_reason(result: Any) -> Optional[str]:
    """
    Message for a transfer result that reports failure, else None.

    A result is a rejection when it is exactly False, or when it is a mapping
    or object whose success flag is exactly False. The message comes from
    the result's `message` or `error` field when it has one.
    """
    if result is False:
        return REJECTED_MESSAGE
    if result is None or isinstance(result, (str, bytes, int, float)):
        return None

    for flag in _SUCCESS_FLAGS:
        if _field(result, flag) is False:
            error = _field(result, "error")
            if isinstance(error, str) and error:
                return error
            return _message_field(result) or _message_field(error) or REJECTED_MESSAGE
    return None
