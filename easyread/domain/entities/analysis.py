"""Readability metrics and the before/after report."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AnalysisMetrics(BaseModel):
    """Structural and readability metrics of one text snapshot.

    Serialized with camelCase keys (``charCount``, ``readabilityScore``...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    char_count: int = 0
    word_count: int = 0
    sentence_count: int = 0
    syllable_count: int = 0
    stopword_count: int = 0
    avg_sentence_length: float = 0.0
    avg_word_syllable_length: float = 0.0
    readability_score: float = 0.0


class Improvements(BaseModel):
    """Relative change from the original to the simplified text.

    Ratios are ``(original - simplified) / original`` and are 0 when the
    original metric is 0. They are negative when the simplified text got
    longer or harder.
    """

    char_count_reduction: float
    word_count_reduction: float
    stopword_reduction_count: float
    readability_improvement: float


class QuantitativeAnalysis(BaseModel):
    original: AnalysisMetrics
    simplified: AnalysisMetrics
    improvements: Improvements


class ReportSummary(BaseModel):
    readability_improvement_percent: str
    char_count_reduction_percent: str
    key_message: str


class AnalysisReport(BaseModel):
    """Report stored on a completed job."""

    summary: ReportSummary
    quantitative_analysis: QuantitativeAnalysis
