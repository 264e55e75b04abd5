"""Reading profile entities for the adaptation service."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SentenceLevel(int, Enum):
    """How aggressively sentences are split and restructured."""

    NONE = 0
    SPLIT = 1
    RESTRUCTURE = 2


class VocabularyLevel(int, Enum):
    """How aggressively vocabulary is substituted or explained."""

    NONE = 0
    SUBSTITUTE = 1
    EXPLAIN = 2
    INTERPRET = 3


class ReadingProfile(BaseModel):
    """Per-user adaptation configuration.

    Read-only to the adaptation pipeline; only the profile endpoints write it.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "sentence": 1,
                "vocabulary": 2,
                "known_topics": ["IT", "경제"],
                "email": "reader@example.com",
                "get_recommendations": True,
            }
        }
    )

    sentence: SentenceLevel = SentenceLevel.NONE
    vocabulary: VocabularyLevel = VocabularyLevel.NONE
    known_topics: list[str] = Field(
        default_factory=list,
        description="Topics whose technical vocabulary is kept as is",
    )
    email: Optional[str] = None
    display_name: Optional[str] = None
    get_recommendations: bool = True
    updated_at: Optional[datetime] = None

    @property
    def requests_adaptation(self) -> bool:
        """True when at least one guideline dimension is active."""
        return (
            self.sentence is not SentenceLevel.NONE
            or self.vocabulary is not VocabularyLevel.NONE
        )
