"""
Trip Summary Builder.
Maps the trip form plus the generated document to the fields a share card shows.
"""
import re
from datetime import date
from typing import Optional

from ..models.trip import MAX_HIGHLIGHTS, TripInput, TripSummary
from .highlights import highlight_extractor


DURATION_PATTERN = re.compile(r"(\d+)\s*(天|日|days?|días?|jours?|дн|أيام|दिन|일)", re.IGNORECASE)
ISO_DATE_PATTERN = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})")
INTEREST_SEPARATORS = re.compile(r"[,，、]")

PACE_ICONS = {
    "Slow": "🐢",
    "Moderate": "🚶",
    "Fast": "🏃",
    "Intense": "⚡",
}
DEFAULT_PACE = "Moderate"

DEFAULT_DESTINATION = "My Trip"
H1_PATTERN = re.compile(r"^#\s+(.+)", re.MULTILINE)
H2_PATTERN = re.compile(r"^##\s+(.+)", re.MULTILINE)
H1_SUFFIX = re.compile(r"(行程|旅行|旅程|Itinerary|Trip|Travel|Plan).*", re.IGNORECASE)
H2_SUFFIX = re.compile(r"(行程|旅行|Itinerary|Trip).*", re.IGNORECASE)


def extract_duration(dates: str) -> str:
    """
    Short duration label from a free-form dates string.

    "5 days" style text is returned as written; otherwise the first two
    ISO dates give an inclusive day count. Empty when neither is present.
    """
    match = DURATION_PATTERN.search(dates)
    if match:
        return match.group(0)

    found = ISO_DATE_PATTERN.findall(dates)
    if len(found) >= 2:
        try:
            start, end = (date(int(y), int(m), int(d)) for y, m, d in found[:2])
        except ValueError:
            return ""
        return str((end - start).days + 1)
    return ""


def pace_icon(pace: str) -> str:
    return PACE_ICONS.get(pace, PACE_ICONS[DEFAULT_PACE])


def extract_destination_from_markdown(markdown: str) -> str:
    """Destination read from the document title, e.g. '# Kyoto Itinerary' -> 'Kyoto'."""
    match = H1_PATTERN.search(markdown)
    if match:
        return H1_SUFFIX.sub("", match.group(1)).strip()

    match = H2_PATTERN.search(markdown)
    if match:
        return H2_SUFFIX.sub("", match.group(1)).strip()

    return DEFAULT_DESTINATION


def interest_highlights(interests: str) -> list[str]:
    parts = [part.strip() for part in INTEREST_SEPARATORS.split(interests)[:MAX_HIGHLIGHTS]]
    return [part for part in parts if part]


def build_trip_summary(
    trip: Optional[TripInput],
    markdown: str = "",
    share_url: str = "",
    highlights: Optional[list[str]] = None
) -> TripSummary:
    """
    Build the share card summary.

    Args:
        trip: Form fields; None when only the document is known
        markdown: Generated itinerary
        share_url: Link encoded in the QR code
        highlights: Explicit highlights; extracted from the document, then
            taken from the interests field when not given

    Returns:
        TripSummary for the card engine
    """
    trip = trip or TripInput(pace="")

    destination = trip.destination.strip() or extract_destination_from_markdown(markdown)

    if highlights is None:
        highlights = highlight_extractor.extract(markdown) if markdown else []
    if not highlights:
        highlights = interest_highlights(trip.interests)

    pace = trip.pace or DEFAULT_PACE
    return TripSummary(
        destination=destination,
        duration_label=extract_duration(trip.dates),
        travelers=trip.travelers,
        budget=trip.budget,
        pace_label=trip.pace,
        pace_icon=pace_icon(pace),
        highlights=highlights,
        share_url=share_url,
    )
