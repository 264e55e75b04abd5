"""Guideline construction from reading profiles."""

from ..entities.guideline_set import GuidelineSet
from ..entities.reading_profile import ReadingProfile, SentenceLevel, VocabularyLevel
from ..errors import GuidelineRejectedError

# Every level has an entry; NONE contributes no instruction.
SENTENCE_GUIDELINES: dict[SentenceLevel, str | None] = {
    SentenceLevel.NONE: None,
    SentenceLevel.SPLIT: "긴 문장을 여러 개의 짧은 문장으로 나눠주세요.",
    SentenceLevel.RESTRUCTURE: (
        "긴 문장을 짧게 나누고, 복잡한 문장 구조(예: 종속절, 관계절)를 "
        "더 이해하기 쉬운 단순한 형태로 재구성해주세요."
    ),
}

VOCABULARY_GUIDELINES: dict[VocabularyLevel, str | None] = {
    VocabularyLevel.NONE: None,
    VocabularyLevel.SUBSTITUTE: "어려운 한자어나 외래어를 쉬운 우리말로 바꿔주세요.",
    VocabularyLevel.EXPLAIN: (
        "어려운 한자어/외래어를 쉬운 말로 바꾸고, 일상적으로 쓰이지 않는 "
        "전문 용어나 관용구를 풀어서 설명해주세요."
    ),
    VocabularyLevel.INTERPRET: (
        "어려운 어휘, 전문 용어, 관용구를 쉬운 말로 바꾸고, 추상적이거나 "
        "비유적인 표현을 더 명확하고 직설적인 의미로 해석하여 전달해주세요."
    ),
}

REJECTION_MESSAGE = (
    "읽기 프로필에 활성화된 순화 단계가 없습니다. "
    "문장 또는 어휘 단계를 1 이상으로 설정해주세요."
)


def build_guidelines(profile: ReadingProfile) -> GuidelineSet:
    """Build the guideline set for a profile.

    Raises:
        GuidelineRejectedError: If neither sentence nor vocabulary
            simplification is requested.
    """
    if not profile.requests_adaptation:
        raise GuidelineRejectedError(REJECTION_MESSAGE)

    instructions = [
        line
        for line in (
            SENTENCE_GUIDELINES[profile.sentence],
            VOCABULARY_GUIDELINES[profile.vocabulary],
        )
        if line is not None
    ]
    return GuidelineSet(
        instructions=tuple(instructions),
        known_topics=tuple(profile.known_topics),
    )
