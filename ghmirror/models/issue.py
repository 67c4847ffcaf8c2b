"""Mirrored issue model"""
from sqlalchemy import Column, Integer, Text

from ghmirror.models.base import Base


class Issue(Base):
    """Issue copied from GitHub; never modified after insert"""

    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, autoincrement=False)  # GitHub issue ID
    number = Column(Integer)  # Repository-scoped issue number, the resume cursor
    title = Column(Text)
    body = Column(Text)
    updated_at = Column(Text)  # ISO 8601 as returned by GitHub

    def __repr__(self):
        return f"<Issue(number={self.number}, id={self.id})>"
