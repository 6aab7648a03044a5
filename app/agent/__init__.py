"""Agent module for AI-powered video analysis.

Builds prompts from classified video content, calls the configured AI
provider and turns its completion into a trading report, falling back
to a locally generated report when anything goes wrong.
"""

from app.agent.video_agent import VideoAnalyzer, AnalysisOutcome, MetadataSource
from app.agent.report_builder import build_prompt, build_fallback_report, assemble_report
from app.agent.response_parser import parse_report

__all__ = [
    "VideoAnalyzer",
    "AnalysisOutcome",
    "MetadataSource",
    "build_prompt",
    "build_fallback_report",
    "assemble_report",
    "parse_report",
]
