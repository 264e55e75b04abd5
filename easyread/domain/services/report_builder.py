"""Before/after report assembly."""

import math

from ..entities.analysis import (
    AnalysisMetrics,
    AnalysisReport,
    Improvements,
    QuantitativeAnalysis,
    ReportSummary,
)
from .text_analysis import analyze_text


def relative_reduction(original: float, simplified: float) -> float:
    """``(original - simplified) / original``, or 0 when ``original`` is 0.

    Not clamped: a simplified text that got worse yields a negative value.
    """
    if original == 0:
        return 0.0
    return (original - simplified) / original


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _key_message(char_count_reduction: float, readability_improvement: float) -> str:
    shorter = _round_half_up(char_count_reduction * 100)
    easier = _round_half_up(readability_improvement * 100)
    return f"텍스트가 약 {shorter}% 짧아졌고, 읽기 쉬운 정도는 약 {easier}% 향상되었어요."


def compare_metrics(original: AnalysisMetrics, simplified: AnalysisMetrics) -> AnalysisReport:
    """Build the report for two already analyzed snapshots."""
    improvements = Improvements(
        char_count_reduction=relative_reduction(original.char_count, simplified.char_count),
        word_count_reduction=relative_reduction(original.word_count, simplified.word_count),
        stopword_reduction_count=relative_reduction(original.stopword_count, simplified.stopword_count),
        readability_improvement=relative_reduction(
            original.readability_score, simplified.readability_score
        ),
    )
    summary = ReportSummary(
        readability_improvement_percent=f"{improvements.readability_improvement * 100:.1f}",
        char_count_reduction_percent=f"{improvements.char_count_reduction * 100:.1f}",
        key_message=_key_message(
            improvements.char_count_reduction, improvements.readability_improvement
        ),
    )
    return AnalysisReport(
        summary=summary,
        quantitative_analysis=QuantitativeAnalysis(
            original=original,
            simplified=simplified,
            improvements=improvements,
        ),
    )


def build_report(original_text: str, simplified_text: str) -> AnalysisReport:
    """Analyze both snapshots and compare them."""
    return compare_metrics(analyze_text(original_text), analyze_text(simplified_text))
