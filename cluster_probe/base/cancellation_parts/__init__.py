"""One-class-per-file parts for cooperative cancellation."""

from .cancelled_error import CancelledError
from .cancellation_token import CancellationToken
from .state import State

__all__ = ["CancelledError", "CancellationToken", "State"]
