"""
Response rendering for store endpoints.

Store handlers answer either with a short plain‑text message or with a
single model wrapped under a named field, e.g.
``{"question": {"qid": 1, "text": "Why?"}}``.  When no name is given the
model is wrapped under ``DEFAULT_TAG``.  JSON bodies are compact and end
with a newline.
"""

import json
from typing import Optional

from fastapi import Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel


DEFAULT_TAG = "value0"


class ResponseEncoder:
    """Build FastAPI responses for store handlers."""

    media_type = "application/json"

    def text(self, body: str, status_code: int = status.HTTP_200_OK) -> Response:
        return PlainTextResponse(body, status_code=status_code)

    def value(
        self,
        model: BaseModel,
        tag: Optional[str] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> Response:
        """Serialize ``model`` wrapped under ``tag`` (or ``DEFAULT_TAG``)."""
        payload = {tag or DEFAULT_TAG: model.model_dump(mode="json")}
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n"
        return Response(content=body, status_code=status_code, media_type=self.media_type)
