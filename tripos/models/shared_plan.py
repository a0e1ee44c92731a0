"""
Shared plan models - Short-id links to previously generated itineraries.
"""
from pydantic import BaseModel, Field
from typing import Optional
from urllib.parse import urlencode
import secrets
import string
import time

from .trip import GeneratedPlan, Language, Source
from ..config import settings


ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
ID_LENGTH = 8


def generate_short_id() -> str:
    """Draw an 8-character id uniformly from the 62-symbol alphabet."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def _now_ms() -> int:
    return int(time.time() * 1000)


class SharedPlanRecord(BaseModel):
    """A stored plan addressable by its short id."""
    id: str = Field(..., min_length=ID_LENGTH, max_length=ID_LENGTH)
    markdown: str
    sources: list[Source] = Field(default_factory=list)
    lang: Language = Language.EN
    created_at: int = Field(
        default_factory=_now_ms,
        description="Creation time in epoch milliseconds"
    )


class SharedPlanStore:
    """
    In-memory store capped at `capacity` plans.

    Once the cap is exceeded the record with the smallest `created_at` is
    evicted; records created in the same millisecond leave in insertion order.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity or settings.share_store_capacity
        self._plans: dict[str, SharedPlanRecord] = {}

    def save(
        self,
        plan: GeneratedPlan,
        lang: Language = Language.EN,
        created_at: Optional[int] = None
    ) -> str:
        """Store a plan and return its short id."""
        plan_id = generate_short_id()
        while plan_id in self._plans:
            plan_id = generate_short_id()

        record = SharedPlanRecord(
            id=plan_id,
            markdown=plan.markdown,
            sources=plan.sources,
            lang=lang,
            created_at=created_at if created_at is not None else _now_ms(),
        )
        self._plans[plan_id] = record
        self._evict()
        return plan_id

    def get(self, plan_id: str) -> Optional[SharedPlanRecord]:
        """Get a plan by id, or None if unknown or evicted."""
        return self._plans.get(plan_id)

    def delete(self, plan_id: str):
        """Delete a plan."""
        self._plans.pop(plan_id, None)

    def __len__(self) -> int:
        return len(self._plans)

    def _evict(self):
        while len(self._plans) > self.capacity:
            # min() keeps the first of equal keys, i.e. the earliest inserted
            oldest = min(self._plans.values(), key=lambda r: r.created_at)
            del self._plans[oldest.id]


def generate_share_url(plan_id: str, lang: Language = Language.EN) -> str:
    """Build the public link for a shared plan."""
    query = urlencode({"share": plan_id, "lang": Language(lang).value})
    return f"{settings.public_base_url.rstrip('/')}/?{query}"


# Global share store
share_store = SharedPlanStore()
