"""Services for Trip OS."""
from .llm_client import LLMClient
from .inline_formatter import InlineSpanFormatter, render_html, strip_markdown
from .markdown_parser import MarkdownBlockParser
from .highlights import HighlightExtractor
from .qr_client import QRClient
from .card_renderer import CardLayoutEngine, RenderedCard
from .summary_builder import build_trip_summary
from .plan_generator import PlanGenerator, PlanGenerationError

__all__ = [
    "LLMClient",
    "InlineSpanFormatter",
    "render_html",
    "strip_markdown",
    "MarkdownBlockParser",
    "HighlightExtractor",
    "QRClient",
    "CardLayoutEngine",
    "RenderedCard",
    "build_trip_summary",
    "PlanGenerator",
    "PlanGenerationError",
]
