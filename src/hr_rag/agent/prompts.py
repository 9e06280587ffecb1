"""Prompt templates for answer generation.

Keeping prompts in one place makes them easy to audit, version, and A/B
test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from hr_rag.retrieval.models import Bundle

ANSWER_SYSTEM = """\
당신은 회사 인사(HR)·노무 상담 챗봇입니다.

규칙:
1. 반드시 한국어로 답하세요.
2. 근거는 회사 규정(취업규칙·단체협약·임금협약)을 먼저, 그다음 법령 순으로 제시하세요.
3. 핵심 내용은 bullet(•)로 간결하게 정리하세요.
4. 제공된 근거에 없는 내용은 추측하지 말고 확인이 필요하다고 말하세요.
5. 마지막에 "주의/근거" 2~3줄로 유의사항과 참고한 문서(출처/제목)를 요약하세요.
"""

NO_CONTEXT = "(검색된 근거 없음)"


def build_answer_prompt(
    query: str,
    bundles: list[Bundle],
    max_chars_per_item: int = 500,
) -> list[BaseMessage]:
    """Assemble the chat messages for one answer.

    Parameters
    ----------
    query:
        The user's utterance.
    bundles:
        Retrieved contexts; every context of every bundle is quoted,
        tagged with its ``source/title`` and cut to *max_chars_per_item*.
    """
    context = format_contexts(bundles, max_chars_per_item) or NO_CONTEXT
    return [
        SystemMessage(content=ANSWER_SYSTEM),
        HumanMessage(content=f"[사용자 질문]\n{query}\n\n[검색된 근거]\n{context}"),
    ]


def format_contexts(bundles: list[Bundle], max_chars_per_item: int = 500) -> str:
    return "\n\n".join(
        f"【{ctx.label()}】 {ctx.content[:max_chars_per_item]}"
        for bundle in bundles
        for ctx in bundle.contexts
    )
