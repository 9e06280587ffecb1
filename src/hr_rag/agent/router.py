"""Keyword router — picks which document pools answer a question."""

from __future__ import annotations

from hr_rag.retrieval.models import AgentMode

COMPANY_KEYWORDS: tuple[str, ...] = (
    "취업규칙",
    "단체협약",
    "임금협약",
    "연차",
    "휴가",
    "특별휴가",
    "수당",
    "교대",
    "승진",
    "밴드",
)
LAW_KEYWORDS: tuple[str, ...] = (
    "근로기준법",
    "연차유급휴가",
    "해고",
    "서면통지",
    "고용보험",
    "산재",
    "유연근무",
    "출산휴가",
    "육아휴직",
)


def classify(user_text: str) -> AgentMode:
    """Return the routing mode for *user_text*.

    Company-policy keywords win over labor-law keywords; text matching
    neither (including the empty string) is routed to ``mix``.
    """
    text = user_text.lower()
    if any(keyword in text for keyword in COMPANY_KEYWORDS):
        return AgentMode.COMPANY
    if any(keyword in text for keyword in LAW_KEYWORDS):
        return AgentMode.LAW
    return AgentMode.MIX
