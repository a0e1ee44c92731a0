"""
Trip models - Form input, generated plans and share card summaries.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


MAX_HIGHLIGHTS = 4


class Language(str, Enum):
    """Supported output languages."""
    EN = "en"
    ZH_CN = "zh-CN"
    ZH_TW = "zh-TW"
    JA = "ja"
    KO = "ko"
    HI = "hi"
    ES = "es"
    FR = "fr"
    AR = "ar"
    PT = "pt"
    RU = "ru"


class TripInput(BaseModel):
    """Trip request as submitted from the planning form."""
    destination: str = Field("", description="Where the trip goes")
    arrival_detail: str = Field("", description="Arrival flight or time")
    departure_detail: str = Field("", description="Departure flight or time")
    dates: str = Field("", description="Free-form dates, e.g. '2026-03-01 to 2026-03-05'")
    travelers: str = ""
    budget: str = ""
    pace: str = Field("Moderate", description="Slow | Moderate | Fast | Intense")
    interests: str = ""
    must_dos: str = ""
    constraints: str = ""
    accommodation: str = ""
    transport_pref: str = ""
    diet: str = ""
    work: str = ""
    bookings: str = ""
    other: str = ""


class Source(BaseModel):
    """A grounding source cited by the plan."""
    title: str
    uri: str


class GeneratedPlan(BaseModel):
    """Markdown itinerary returned by the LLM."""
    markdown: str
    sources: list[Source] = Field(default_factory=list)


class AspectRatio(str, Enum):
    """Share card canvas targets."""
    SQUARE = "1:1"
    STORY = "9:16"

    @property
    def width(self) -> int:
        return 1080

    @property
    def height(self) -> int:
        return 1080 if self is AspectRatio.SQUARE else 1920

    @property
    def tag(self) -> str:
        """Filename-safe form, e.g. '9x16'."""
        return self.value.replace(":", "x")

    @property
    def qr_size(self) -> int:
        return 160 if self is AspectRatio.SQUARE else 200

    @property
    def qr_bottom_gap(self) -> int:
        """Space kept between the QR tile and the card's bottom padding."""
        return 80 if self is AspectRatio.SQUARE else 100


class TripSummary(BaseModel):
    """Everything the share card displays."""
    model_config = ConfigDict(frozen=True)

    destination: str
    duration_label: str = ""
    travelers: str = ""
    budget: str = ""
    pace_label: str = ""
    pace_icon: str = "🚶"
    highlights: list[str] = Field(default_factory=list)
    share_url: str = ""

    @field_validator("highlights", mode="after")
    @classmethod
    def cap_highlights(cls, v: list[str]) -> list[str]:
        return v[:MAX_HIGHLIGHTS]
