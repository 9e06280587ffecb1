"""Kakao i Open Builder skill payloads (request parsing, response building)."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "잠시 오류가 발생했어요. 조금 뒤 다시 시도해 주세요."
EMPTY_UTTERANCE_TEXT = "질문을 입력해 주세요. 예) 연차휴가는 며칠인가요?"
GET_ACK_TEXT = "카카오 웹훅 OK (GET). 테스트는 POST로 보내주세요."


# ── Request schema ────────────────────────────────────────────────────
class SkillUser(BaseModel):
    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str | None:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value if isinstance(value, str) else None


class UserRequest(BaseModel):
    utterance: str | None = None
    user: SkillUser | None = None

    @field_validator("user", mode="before")
    @classmethod
    def _drop_malformed_user(cls, value: Any) -> Any:
        # a bad user block costs only the id, never the utterance
        return value if isinstance(value, dict) else None


class SkillRequest(BaseModel):
    """The subset of the skill payload the chatbot reads."""

    model_config = ConfigDict(populate_by_name=True)

    user_request: UserRequest = Field(default_factory=UserRequest, alias="userRequest")

    @property
    def utterance(self) -> str:
        return (self.user_request.utterance or "").strip()

    @property
    def user_id(self) -> str:
        user = self.user_request.user
        return (user.id if user else None) or "anon"


def parse_skill_request(raw: bytes) -> SkillRequest:
    """Parse a raw webhook body; anything malformed becomes an empty request."""
    if not raw:
        return SkillRequest()
    try:
        return SkillRequest.model_validate(json.loads(raw))
    except (ValueError, PydanticValidationError):
        logger.warning("Malformed skill payload, treating as empty: %.200r", raw)
        return SkillRequest()


# ── Response schema ───────────────────────────────────────────────────
class QuickReply(BaseModel):
    label: str
    action: str = "message"
    messageText: str  # noqa: N815


class SimpleText(BaseModel):
    text: str


class SimpleTextOutput(BaseModel):
    simpleText: SimpleText  # noqa: N815


class SkillTemplate(BaseModel):
    outputs: list[SimpleTextOutput]
    quickReplies: list[QuickReply] = []  # noqa: N815


class SkillResponse(BaseModel):
    version: str = "2.0"
    template: SkillTemplate


QUICK_REPLIES: list[QuickReply] = [
    QuickReply(label="회사규정으로 다시", messageText="회사 규정 기준으로 다시 알려줘"),
    QuickReply(label="법 기준으로 다시", messageText="법 기준으로 다시 알려줘"),
]


def skill_text(
    text: str,
    quick_replies: list[QuickReply] | None = None,
    max_chars: int = 2500,
) -> dict:
    """Return a ``simpleText`` skill response as a JSON-ready dict."""
    response = SkillResponse(
        template=SkillTemplate(
            outputs=[SimpleTextOutput(simpleText=SimpleText(text=text[:max_chars]))],
            quickReplies=quick_replies or [],
        )
    )
    return response.model_dump()
