"""Pre-reading questions for an article."""

import hashlib
import logging
from typing import Sequence

from ..entities.question import PreReadingQuestionSet
from ..interfaces.reading_aid_oracle import ReadingAidOracle
from .paragraphs import join_texts

logger = logging.getLogger(__name__)


def text_digest(text: str) -> str:
    """SHA-256 hex digest identifying an article's text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class PreReadingService:
    """Asks the oracle for questions about the reader's background."""

    def __init__(self, oracle: ReadingAidOracle):
        self.oracle = oracle

    async def generate_questions(self, texts: Sequence[str]) -> PreReadingQuestionSet:
        """Generate questions for the article made of ``texts``.

        The returned hash lets a later request refer to the same text.

        Raises:
            OracleUnavailableError: If the upstream service failed.
            OracleMalformedResponseError: If the output is structurally invalid.
        """
        text = join_texts(texts)
        questions = await self.oracle.generate_questions(text)
        digest = text_digest(text)
        logger.info(f"Generated {len(questions)} pre-reading question(s) for text {digest[:12]}")
        return PreReadingQuestionSet(questions=questions, original_text_hash=digest)
