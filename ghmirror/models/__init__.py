"""Database models"""

from ghmirror.models.base import Base, SchemaState
from ghmirror.models.comment import Comment
from ghmirror.models.issue import Issue

__all__ = [
    "Base",
    "SchemaState",
    "Issue",
    "Comment",
]
