"""Domain services for the text adaptation service."""

from .adaptation_service import AdaptationService, AdaptationSubmission
from .glossary_service import GlossaryService
from .guidelines import build_guidelines
from .pre_reading import PreReadingService, text_digest
from .report_builder import build_report, compare_metrics
from .report_service import ReportService, ReportStatus
from .text_analysis import analyze_text

__all__ = [
    "AdaptationService",
    "AdaptationSubmission",
    "GlossaryService",
    "PreReadingService",
    "ReportService",
    "ReportStatus",
    "analyze_text",
    "build_guidelines",
    "build_report",
    "compare_metrics",
    "text_digest",
]
