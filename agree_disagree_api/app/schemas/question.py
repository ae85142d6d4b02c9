"""
Pydantic schema for questions.

Questions are numbered from 1 in the order they are added to a store.
QID 0 is reserved: every store keeps a placeholder question under it so
that list positions and QIDs coincide.
"""

from pydantic import BaseModel, Field


QID_NONE = 0


class Question(BaseModel):
    """A single agree/disagree question."""

    qid: int = Field(QID_NONE, ge=0, description="Sequential question ID; 0 means none")
    text: str = Field("", description="Question text, unique within a store")
