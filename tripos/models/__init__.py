"""Data models for Trip OS."""
from .blocks import (
    Block,
    Blockquote,
    CheckboxItem,
    Heading,
    ListItem,
    Paragraph,
    StyledRun,
    Table,
)
from .trip import AspectRatio, GeneratedPlan, Language, Source, TripInput, TripSummary
from .shared_plan import SharedPlanRecord, SharedPlanStore, share_store
from .card_labels import CardLabels, get_card_labels

__all__ = [
    "Block",
    "Blockquote",
    "CheckboxItem",
    "Heading",
    "ListItem",
    "Paragraph",
    "StyledRun",
    "Table",
    "AspectRatio",
    "GeneratedPlan",
    "Language",
    "Source",
    "TripInput",
    "TripSummary",
    "SharedPlanRecord",
    "SharedPlanStore",
    "share_store",
    "CardLabels",
    "get_card_labels",
]
