"""Mirrored comment model"""
from sqlalchemy import Column, Integer, Text

from ghmirror.models.base import Base


class Comment(Base):
    """Issue comment copied from GitHub"""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=False)  # GitHub comment ID
    issue_id = Column(Integer)  # issues.id of the owning issue
    body = Column(Text)
    updated_at = Column(Text)

    def __repr__(self):
        return f"<Comment(id={self.id}, issue_id={self.issue_id})>"
