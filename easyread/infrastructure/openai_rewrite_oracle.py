"""Rewrite oracle backed by the OpenAI chat completions API."""

import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from ..domain.entities import GuidelineSet, Paragraph, PreReadingQuestion, TermCandidate, TermDefinition
from ..domain.errors import OracleMalformedResponseError, OracleUnavailableError
from ..domain.services.paragraphs import ensure_aligned, join_paragraphs

logger = logging.getLogger(__name__)

SIMPLIFY_TOOL_NAME = "simplify_text"
QUESTIONS_TOOL_NAME = "generate_preliminary_questions"

SIMPLIFY_TOOL = {
    "type": "function",
    "function": {
        "name": SIMPLIFY_TOOL_NAME,
        "description": "Rewrites text paragraphs based on the reader's profile.",
        "parameters": {
            "type": "object",
            "properties": {
                "simplified_paragraphs": {
                    "type": "array",
                    "description": "The list of simplified paragraphs, keeping the original IDs.",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "integer", "description": "The original paragraph ID."},
                            "text": {"type": "string", "description": "The simplified paragraph text."},
                        },
                        "required": ["id", "text"],
                    },
                },
            },
            "required": ["simplified_paragraphs"],
        },
    },
}

SIMPLIFY_SYSTEM_PROMPT = "You are an expert editor that returns only a single, valid JSON object."

SIMPLIFY_PROMPT = """## 역할 (Persona)
당신은 전문 편집자입니다. 사용자의 프로필을 바탕으로 원문 텍스트를 '순화'하는 임무를 맡았습니다. '요약'이 아님에 주의하세요.

## 사용자 프로필
{profile}

## 지침
- **문단 구조 유지**: 원문의 문단 개수와 순서, 각 문단의 id를 반드시 유지하세요. 각 문단은 개별적으로 순화되어야 합니다.
- **정보량 보존**: 원문의 핵심 정보와 세부 사항을 생략하거나 요약하지 마세요.
- **어휘 및 문장 구조 순화**: 어려운 단어는 쉬운 말로 바꾸고, 복잡하고 긴 문장은 더 짧고 명확한 여러 문장으로 나누세요.
- 본문의 주제가 사용자의 '자신 있는 분야'에 포함되면 전문 용어를 순화하지 말고 그대로 사용하세요.
- 원문의 핵심 의미를 절대 왜곡하지 마세요.
- 결과물은 반드시 한국어로 작성하세요.

## 원문 문단 (Original Paragraphs, JSON)
{paragraphs}
"""

SUMMARY_SYSTEM_PROMPT = "You are an expert summarizer who writes concise and complete summaries."

SUMMARY_PROMPT = """## 역할 (Persona)
당신은 전문 요약가입니다. 주어진 텍스트의 핵심 내용을 간결하게 요약하세요.

## 지침
- 전체 텍스트의 핵심 아이디어와 가장 중요한 정보만을 추출하세요.
- 결과물은 한 개의 문단으로 구성되어야 합니다.
- 분량은 300자 내외로 맞춰주세요.
- 결과물은 반드시 한국어로 작성하세요.

## 원문 텍스트 (Original Text)
---
{text}
---
"""

QUESTIONS_TOOL = {
    "type": "function",
    "function": {
        "name": QUESTIONS_TOOL_NAME,
        "description": "Generate preliminary questions for a user based on text analysis.",
        "parameters": {
            "type": "object",
            "properties": {
                "questions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "integer", "description": "Unique ID for the question (1, 2, 3...)"},
                            "text": {"type": "string", "description": "The Yes/No question text."},
                            "type": {
                                "type": "string",
                                "description": "The type of question.",
                                "enum": ["topic_and_scope", "terminology", "style_and_structure"],
                            },
                        },
                        "required": ["id", "text", "type"],
                    },
                },
            },
            "required": ["questions"],
        },
    },
}

QUESTIONS_SYSTEM_PROMPT = "You are a helpful assistant that outputs only a JSON object."

QUESTIONS_PROMPT = """## 역할 (Persona)
당신은 사용자의 학습 경험을 설계하는 교육 설계 전문가입니다. 주어진 텍스트를 사용자가 더 쉽게 이해할 수 있도록, 사용자의 사전 지식과 읽기 선호도를 파악하는 Yes/No 질문 3개를 만드세요.

## 규칙 (Rules)
1. 첫 번째 질문 (topic_and_scope): 글의 세부 주제와 포괄적 주제(각각 10자 이내의 명사), 글의 종류를 추출해 다음 형식으로 질문하세요.
   '{{세부주제}}에 관한 {{글의 종류}}입니다. {{포괄주제}}에 대한 기본 지식이 있나요?'
2. 두 번째 질문 (terminology): 독자가 어려워할 만한 핵심 전문 용어 1~2개에 대한 기본 지식이 있는지 질문하세요.
3. 세 번째 질문 (style_and_structure): 다음 우선순위로 가장 두드러지는 특징 하나만 골라 순화를 제안하세요.
   - 30단어 이상의 문장이 전체의 30% 이상이면 문장을 나누어 줄지 질문하세요.
   - 그렇지 않고 비유나 은유가 3개 이상이면 직설적인 설명으로 바꿀지 질문하세요.
   - 그 외에는 문단 길이나 전개 방식 등 다른 구조적 특징에 대한 개선을 제안하세요.

## 제약 조건 (Constraints)
- 반드시 3개의 질문을 생성하세요.
- 모든 질문은 '예' 또는 '아니오'로 답할 수 있어야 합니다.
- 질문은 본문의 구체적인 내용이나 스타일에 기반해야 합니다.

## 분석할 본문
---
{text}
---
"""

TERMS_SYSTEM_PROMPT = (
    "You are an expert in Korean vocabulary analysis and return only a single JSON object "
    "with a 'words' key. The value is an array of objects, each with 'word' and 'tag' keys."
)

TERMS_PROMPT = """너는 한국어 어휘 분석 전문가야. 주어진 텍스트에서 아래 기준에 부합하는 단어를 합쳐 최대 15개까지만 추출해줘.

## 추출 기준
1. 고급 어휘: 일상 대화에서는 자주 쓰이지 않는 학술적, 기술적, 또는 한자 기반의 단일 명사. (예: '온톨로지', '변증법')
2. 전문 용어: 사용자의 관심 주제와 관련된 특정 분야의 용어. 약어를 포함해. (예: 'GPU', 'AI', 'M&A')

## 제외 기준
- 의성어, 의태어, 일반적인 형용사와 동사는 추출하지 마.
- 비유적 표현이나 문장은 추출하지 마.
- 각 단어의 의미를 조합해 뜻을 쉽게 유추할 수 있는 일반적인 명사구는 추출하지 마.

## 사용자의 관심 주제: [{topics}]
## 사용 가능한 태그: [{tags}]

결과는 반드시 다음 형식의 JSON 객체로 반환해줘:
{{"words": [{{"word": "추출단어1", "tag": "태그1"}}, ...]}}

## 분석할 텍스트
"{text}"
"""

DEFINITION_SYSTEM_PROMPT = (
    "You are an expert in Korean definitions who understands context and returns only a JSON object."
)

DEFINITION_PROMPT = """문맥 "{context}" 안에서 사용된 한국어 단어 "{term}"에 대해 다음 정보를 JSON 형식으로 제공해줘.

- 단어가 'GPU', 'AI', 'M&A' 같은 약어라면 longDefinition에 반드시 전체 이름을 포함해.
- 사용자는 [{topics}] 분야에 익숙해. 이와 관련된 전문 용어라면 해당 분야의 의미를 우선 설명해.

## 출력 형식
{{
    "shortDefinition": "한 줄로 요약된 정의 (20자 이내)",
    "longDefinition": "문맥과 전문 분야를 고려한 상세한 설명 (100자 이내)"
}}

단어: "{term}"
문맥: "{context}"
"""


class _SimplifyArguments(BaseModel):
    simplified_paragraphs: list[Paragraph]


class _QuestionArguments(BaseModel):
    questions: list[PreReadingQuestion] = []


@dataclass
class OpenAIOracleConfig:
    """Configuration for the OpenAI rewrite oracle."""
    api_key: Optional[str] = None
    model: str = "gpt-4-turbo"
    temperature: float = 0.3
    summary_max_tokens: int = 700
    questions_model: str = "gpt-3.5-turbo-1106"
    questions_temperature: float = 0.7
    questions_max_tokens: int = 1000
    timeout_seconds: float = 120.0
    max_retries: int = 0


class OpenAIRewriteOracle:
    """Adapter that implements RewriteOracle and ReadingAidOracle on OpenAI.

    Rewrites and questions use forced function calls; glossary calls use
    JSON mode.
    """

    def __init__(self, config: Optional[OpenAIOracleConfig] = None, client: Optional[AsyncOpenAI] = None):
        """Initialize the oracle.

        Args:
            config: Optional configuration object.
            client: Optional pre-built client; built from ``config`` otherwise.
        """
        self.config = config or OpenAIOracleConfig()
        self._client = client or AsyncOpenAI(
            api_key=self.config.api_key,
            timeout=self.config.timeout_seconds,
            max_retries=self.config.max_retries,
        )

    async def rewrite(
        self,
        paragraphs: Sequence[Paragraph],
        guidelines: GuidelineSet,
    ) -> list[Paragraph]:
        """Ask the model to simplify each paragraph, keeping ids and order."""
        payload = json.dumps(
            [{"id": p.id, "text": p.text} for p in paragraphs],
            ensure_ascii=False,
        )
        prompt = SIMPLIFY_PROMPT.format(profile=guidelines.render(), paragraphs=payload)

        completion = await self._complete(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SIMPLIFY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            tools=[SIMPLIFY_TOOL],
            tool_choice={"type": "function", "function": {"name": SIMPLIFY_TOOL_NAME}},
            temperature=self.config.temperature,
        )

        arguments = self._tool_arguments(
            completion, _SimplifyArguments, "AI 모델이 유효한 순화 결과를 생성하지 못했습니다."
        )
        return ensure_aligned(paragraphs, arguments.simplified_paragraphs)

    async def summarize(self, paragraphs: Sequence[Paragraph]) -> str:
        """Ask the model for a single-paragraph summary of roughly 300 characters."""
        prompt = SUMMARY_PROMPT.format(text=join_paragraphs(paragraphs))

        completion = await self._complete(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self.config.summary_max_tokens,
        )

        content = self._content(completion)
        if not content:
            raise OracleMalformedResponseError("AI 모델이 요약 결과를 생성하지 못했습니다.")
        return content.strip()

    async def generate_questions(self, text: str) -> list[PreReadingQuestion]:
        """Ask the model for three yes/no pre-reading questions."""
        completion = await self._complete(
            model=self.config.questions_model,
            messages=[
                {"role": "system", "content": QUESTIONS_SYSTEM_PROMPT},
                {"role": "user", "content": QUESTIONS_PROMPT.format(text=text)},
            ],
            tools=[QUESTIONS_TOOL],
            tool_choice={"type": "function", "function": {"name": QUESTIONS_TOOL_NAME}},
            temperature=self.config.questions_temperature,
            max_tokens=self.config.questions_max_tokens,
        )

        arguments = self._tool_arguments(
            completion, _QuestionArguments, "AI 모델이 유효한 사전 질문을 생성하지 못했습니다."
        )
        return arguments.questions

    async def extract_terms(
        self,
        text: str,
        known_topics: Sequence[str],
        tags: Sequence[str],
    ) -> list[TermCandidate]:
        """Extract up to 15 hard terms; malformed items are skipped."""
        prompt = TERMS_PROMPT.format(topics=", ".join(known_topics), tags=", ".join(tags), text=text)
        completion = await self._complete(
            model=self.config.model,
            messages=[
                {"role": "system", "content": TERMS_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )

        words = self._json_content(completion).get("words")
        if not isinstance(words, list):
            return []

        candidates = []
        for word in words:
            try:
                candidates.append(TermCandidate.model_validate(word))
            except ValidationError:
                logger.warning(f"Invalid word object found: {word!r}")
        return candidates

    async def define_term(
        self,
        term: str,
        context: str,
        known_topics: Sequence[str],
    ) -> TermDefinition:
        """Define a term in context; missing keys become empty strings."""
        prompt = DEFINITION_PROMPT.format(term=term, context=context, topics=", ".join(known_topics))
        completion = await self._complete(
            model=self.config.model,
            messages=[
                {"role": "system", "content": DEFINITION_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )

        try:
            return TermDefinition.model_validate(self._json_content(completion))
        except ValidationError as e:
            raise OracleMalformedResponseError(
                f"AI 모델이 '{term}'의 정의를 생성하지 못했습니다.", details=str(e)
            ) from e

    async def _complete(self, **request):
        try:
            return await self._client.chat.completions.create(**request)
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise OracleUnavailableError("AI 모델 호출에 실패했습니다.", details=str(e)) from e

    def _content(self, completion) -> Optional[str]:
        return completion.choices[0].message.content if completion.choices else None

    def _json_content(self, completion) -> dict:
        """Parse a JSON-mode completion into a dict."""
        try:
            parsed = json.loads(self._content(completion) or "")
        except json.JSONDecodeError as e:
            raise OracleMalformedResponseError("AI 모델이 JSON 형식으로 응답하지 않았습니다.", details=str(e)) from e
        if not isinstance(parsed, dict):
            raise OracleMalformedResponseError("AI 모델이 JSON 객체로 응답하지 않았습니다.")
        return parsed

    def _tool_arguments(self, completion, model: type[BaseModel], message: str):
        """Extract and validate the forced tool call's arguments."""
        choice_message = completion.choices[0].message if completion.choices else None
        tool_calls = getattr(choice_message, "tool_calls", None) or []
        if not tool_calls or not tool_calls[0].function.arguments:
            raise OracleMalformedResponseError(message)

        try:
            return model.model_validate(json.loads(tool_calls[0].function.arguments))
        except (json.JSONDecodeError, ValidationError) as e:
            raise OracleMalformedResponseError(message, details=str(e)) from e
