"""
API Routes for Trip OS.
"""
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel
from typing import Optional
import logging

from ..models.blocks import Block, StyledRun
from ..models.card_labels import get_card_labels
from ..models.shared_plan import SharedPlanRecord, generate_share_url, share_store
from ..models.trip import AspectRatio, GeneratedPlan, Language, TripInput
from ..services.card_renderer import get_card_engine
from ..services.highlights import highlight_extractor
from ..services.inline_formatter import inline_formatter, render_html
from ..services.markdown_parser import markdown_parser
from ..services.plan_generator import PlanGenerationError, get_plan_generator
from ..services.summary_builder import build_trip_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trip-os"])


# Request/Response Models
class PlanRequest(BaseModel):
    trip: TripInput
    language: Language = Language.EN


class MarkdownRequest(BaseModel):
    markdown: str


class BlocksResponse(BaseModel):
    blocks: list[Block]


class FormatRequest(BaseModel):
    text: str


class FormatResponse(BaseModel):
    runs: list[StyledRun]
    html: str


class HighlightsResponse(BaseModel):
    highlights: list[str]


class ShareRequest(BaseModel):
    plan: GeneratedPlan
    language: Language = Language.EN


class ShareResponse(BaseModel):
    id: str
    url: str


class CardRequest(BaseModel):
    trip: Optional[TripInput] = None
    markdown: str = ""
    share_url: Optional[str] = None
    share_id: Optional[str] = None
    highlights: Optional[list[str]] = None
    ratio: AspectRatio = AspectRatio.STORY
    language: Language = Language.EN


# Endpoints

@router.post("/plan", response_model=GeneratedPlan)
async def generate_plan(request: PlanRequest):
    """Generate a travel document for the trip form."""
    generator = get_plan_generator()
    try:
        return await generator.generate(request.trip, request.language)
    except PlanGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/blocks", response_model=BlocksResponse)
async def parse_blocks(request: MarkdownRequest):
    """Parse a document into display blocks."""
    return BlocksResponse(blocks=markdown_parser.parse(request.markdown))


@router.post("/format", response_model=FormatResponse)
async def format_text(request: FormatRequest):
    """Format one line into styled runs and HTML."""
    runs = inline_formatter.format(request.text)
    return FormatResponse(runs=runs, html=render_html(runs))


@router.post("/highlights", response_model=HighlightsResponse)
async def extract_highlights(request: MarkdownRequest):
    """Pick up to four highlights from a document."""
    return HighlightsResponse(highlights=highlight_extractor.extract(request.markdown))


@router.post("/share", response_model=ShareResponse)
async def share_plan(request: ShareRequest):
    """Store a plan and return its share link."""
    plan_id = share_store.save(request.plan, request.language)
    return ShareResponse(id=plan_id, url=generate_share_url(plan_id, request.language))


@router.get("/share/{plan_id}", response_model=SharedPlanRecord)
async def get_shared_plan(plan_id: str):
    """Get a shared plan."""
    record = share_store.get(plan_id)
    if not record:
        raise HTTPException(status_code=404, detail="Shared plan not found")
    return record


@router.post("/card")
async def export_card(request: CardRequest):
    """Render the share card PNG."""
    markdown = request.markdown
    share_url = request.share_url or ""

    if request.share_id:
        record = share_store.get(request.share_id)
        if not record:
            raise HTTPException(status_code=404, detail="Shared plan not found")
        markdown = markdown or record.markdown
        share_url = share_url or generate_share_url(record.id, request.language)

    has_destination = request.trip is not None and request.trip.destination.strip()
    if not has_destination and not markdown.strip():
        raise HTTPException(status_code=400, detail="Card needs a destination or a markdown title")

    summary = build_trip_summary(request.trip, markdown, share_url, request.highlights)
    if not summary.destination:
        raise HTTPException(status_code=400, detail="Card needs a destination or a markdown title")

    try:
        card = await get_card_engine().export(
            summary,
            request.ratio,
            get_card_labels(request.language)
        )
    except Exception as e:
        logger.error(f"Card export failed: {e}")
        raise HTTPException(status_code=500, detail=f"Error rendering card: {str(e)}")

    return Response(
        content=card.png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{card.filename}"'}
    )
