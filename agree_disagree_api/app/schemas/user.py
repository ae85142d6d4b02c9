"""
Pydantic schema for users.

A user is identified by a caller‑supplied ``uid`` and carries the
answers it gave, keyed by QID.  On the wire the answers mapping is
rendered as a list of ``{"key": qid, "value": agree}`` entries ordered
by QID, so a user without answers serializes as
``{"uid": "adam", "answers": []}``.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_serializer


class User(BaseModel):
    uid: str = Field(..., min_length=1, description="Caller‑supplied user ID")
    answers: Dict[int, bool] = Field(default_factory=dict, description="Agree (true) or disagree (false) per QID")

    @field_serializer("answers")
    def serialize_answers(self, answers: Dict[int, bool]) -> List[Dict[str, Any]]:
        return [{"key": qid, "value": agree} for qid, agree in sorted(answers.items())]
