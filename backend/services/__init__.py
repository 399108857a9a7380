"""Data-access services for Deep Thoughts."""

from . import thoughts, users
from .users import DuplicateUserError

__all__ = [
    "thoughts",
    "users",
    "DuplicateUserError",
]
