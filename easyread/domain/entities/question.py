"""Pre-reading questions asked before an article is adapted."""

from enum import Enum

from pydantic import BaseModel


class QuestionType(str, Enum):
    TOPIC_AND_SCOPE = "topic_and_scope"
    TERMINOLOGY = "terminology"
    STYLE_AND_STRUCTURE = "style_and_structure"


class PreReadingQuestion(BaseModel):
    """A yes/no question about the reader's background or preferences."""

    id: int
    text: str
    type: QuestionType


class PreReadingQuestionSet(BaseModel):
    """Questions for one article plus the SHA-256 hex digest of its text."""

    questions: list[PreReadingQuestion]
    original_text_hash: str
