"""Echo stub implementation of RewriteOracle for testing and development."""

import logging
from typing import Sequence

from ..domain.entities import (
    GuidelineSet,
    Paragraph,
    PreReadingQuestion,
    QuestionType,
    TermCandidate,
    TermDefinition,
)
from ..domain.services.paragraphs import join_paragraphs

logger = logging.getLogger(__name__)


class EchoRewriteOracle:
    """
    A stub implementation of the RewriteOracle and ReadingAidOracle interfaces.

    It performs no rewriting: paragraphs come back unchanged, which keeps the
    rest of the pipeline runnable without model credentials.
    """

    summary_length: int = 300

    async def rewrite(
        self,
        paragraphs: Sequence[Paragraph],
        guidelines: GuidelineSet,
    ) -> list[Paragraph]:
        logger.debug(
            f"EchoRewriteOracle returning {len(paragraphs)} paragraphs "
            f"({len(guidelines.instructions)} guideline(s) ignored)"
        )
        return [Paragraph(id=p.id, text=p.text) for p in paragraphs]

    async def summarize(self, paragraphs: Sequence[Paragraph]) -> str:
        """Return the leading part of the text, cut at ``summary_length``."""
        text = " ".join(join_paragraphs(paragraphs).split())
        return text[: self.summary_length]

    async def generate_questions(self, text: str) -> list[PreReadingQuestion]:
        """One fixed question of each type."""
        return [
            PreReadingQuestion(id=1, text="이 글의 주제에 대한 기본 지식이 있나요?", type=QuestionType.TOPIC_AND_SCOPE),
            PreReadingQuestion(id=2, text="글에 나오는 전문 용어를 알고 있나요?", type=QuestionType.TERMINOLOGY),
            PreReadingQuestion(id=3, text="긴 문장을 짧게 나누어 드릴까요?", type=QuestionType.STYLE_AND_STRUCTURE),
        ]

    async def extract_terms(
        self,
        text: str,
        known_topics: Sequence[str],
        tags: Sequence[str],
    ) -> list[TermCandidate]:
        return []

    async def define_term(
        self,
        term: str,
        context: str,
        known_topics: Sequence[str],
    ) -> TermDefinition:
        return TermDefinition(short_definition=term, long_definition=context)
