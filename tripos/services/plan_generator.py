"""
Plan Generator.
Turns a trip form into a markdown travel document through the LLM.
"""
import asyncio
import logging
from typing import Optional

from openai import APIError, APITimeoutError

from .llm_client import get_llm_client
from ..models.trip import GeneratedPlan, Language, TripInput

logger = logging.getLogger(__name__)


BASE_INSTRUCTION = """You are "Trip OS", a full-stack AI travel director capable of being a local guide, transport optimizer, budget controller, and risk manager.
Your goal is to produce a complete, actionable, bookable, and optimized itinerary with minimal friction.

## 1) Output Specification (Mandatory)

0. **Weather Intelligence & Strategy**:
   - Based on typical weather patterns for the destination and dates. If the dates are more than 10 days out, use historical data for that place and season as the prediction.
   - FORMAT: **Markdown Table** (no lists).
   - Columns: **Date** | **Condition (Forecast/Historical)** | **Temp (High/Low)** | **Rain Probability** | **Strategic Advice**.
   - One row for EVERY day of the trip.
   - Below the table, one specific strategy summary.

1. **One-Page Overview (TL;DR)**: Core theme, daily pace, transport strategy, accommodation strategy, budget outline.
2. **Daily Itinerary (Day 1...Day N)**:
   - FORMAT: MUST BE A MARKDOWN TABLE.
   - Columns: **Time Range** | **Activity** | **Logistics & Notes**.
   - Morning/Afternoon/Evening blocks + 2-3 "Anchor Activities" + 1 Flex slot.
   - Day 1 and the last day must strictly follow flight arrival/departure times.
   - Estimate door-to-door travel time and method.
   - "Why here": one sentence on the logic (geo-clustering/stamina/queues/weather).
3. **Geo-Clustering**: Explain the logic of grouping spots in the same area.
4. **Plan B**: One alternative per day (Rain/Tired/Crowded).
5. **Booking OS**: Items needing reservation, best time to book, alternatives.
6. **Budget Table**: Accommodation/Transport/Food/Tickets/Misc; Conservative/Standard/Luxury tiers.
7. **Accommodation**: Suggest 2-3 areas, pros/cons.
8. **Transport Rules**: Commute limits, transfer logic, taxi vs train thresholds.
9. **Risks**: Safety, scams, altitude, local rules.
10. **Packing List**: Use Markdown Checkbox syntax (e.g. - [ ] Passport).

## 2) Planning Algorithm

- Start Day 1 after arrival plus exit time; end the last day before departure check-in.
- Group by location first, then sort by energy curve.
- Max 2-3 anchors per day.
- Minimise friction on arrival and departure days.
- Mark uncertain info as [Assumption].

## 3) Constraints

- No wishlists; only actionable schedules.
- High information density, fewer adjectives.
- Use tables for structured data.
"""

LANGUAGE_INSTRUCTIONS = {
    Language.EN: "**IMPORTANT: OUTPUT MUST BE IN ENGLISH.**\n- Clear and professional tone.",
    Language.ZH_CN: (
        "**IMPORTANT: OUTPUT MUST BE IN SIMPLIFIED CHINESE (Mainland China Usage).**\n"
        "- Use terms like \"出租车\" not \"计程车\", \"公交车\" not \"公车\".\n"
        "- Currency format: CNY, JPY, USD etc."
    ),
    Language.ZH_TW: (
        "**IMPORTANT: OUTPUT MUST BE IN TRADITIONAL CHINESE (Taiwan Usage).**\n"
        "- Use terms like \"計程車\" not \"出租車\", \"公車\" not \"公交車\".\n"
        "- Currency format: TWD, JPY, USD etc."
    ),
    Language.JA: (
        "**IMPORTANT: OUTPUT MUST BE IN JAPANESE.**\n"
        "- Natural Japanese phrasing for travel.\n"
        "- Use polite tone (Desu/Masu)."
    ),
    Language.KO: (
        "**IMPORTANT: OUTPUT MUST BE IN KOREAN.**\n"
        "- Use natural Korean travel terminology.\n"
        "- Currency: KRW, JPY, USD."
    ),
    Language.HI: "**IMPORTANT: OUTPUT MUST BE IN HINDI.**\n- Use formal but accessible Hindi.",
    Language.ES: "**IMPORTANT: OUTPUT MUST BE IN SPANISH.**\n- Use neutral Spanish suitable for international travelers.",
    Language.FR: "**IMPORTANT: OUTPUT MUST BE IN FRENCH.**\n- Use professional French.",
    Language.AR: (
        "**IMPORTANT: OUTPUT MUST BE IN ARABIC.**\n"
        "- Keep the text RTL friendly.\n"
        "- Use Modern Standard Arabic."
    ),
    Language.PT: "**IMPORTANT: OUTPUT MUST BE IN PORTUGUESE.**\n- Portuguese adaptable for BR/PT, focus on clarity.",
    Language.RU: "**IMPORTANT: OUTPUT MUST BE IN RUSSIAN.**\n- Use standard Russian travel terminology.",
}

# (prompt label, TripInput field)
PROMPT_FIELDS = [
    ("Destination", "destination"),
    ("Arrival", "arrival_detail"),
    ("Departure", "departure_detail"),
    ("Dates", "dates"),
    ("Travelers", "travelers"),
    ("Budget", "budget"),
    ("Pace", "pace"),
    ("Interests", "interests"),
    ("Must Dos", "must_dos"),
    ("Constraints", "constraints"),
    ("Accommodation Prefs", "accommodation"),
    ("Transport Prefs", "transport_pref"),
    ("Diet", "diet"),
    ("Work/Shopping", "work"),
    ("Existing Bookings", "bookings"),
    ("Other", "other"),
]


class PlanGenerationError(Exception):
    """Raised when no itinerary could be produced; the message is user-facing."""


def build_system_prompt(language: Language) -> str:
    return f"{BASE_INSTRUCTION}\n{LANGUAGE_INSTRUCTIONS[language]}\n"


def build_user_prompt(trip: TripInput, language: Language) -> str:
    lines = ["Trip OS Input Data:"]
    for label, name in PROMPT_FIELDS:
        lines.append(f"- {label}: {getattr(trip, name)}")
    lines.append("")
    lines.append("Please generate the Trip OS plan following the system instructions.")
    lines.append(f"Language Requirement: {language.value}")
    return "\n".join(lines)


class PlanGenerator:
    """Generates travel documents from the trip form."""

    def __init__(self):
        self.llm = get_llm_client()

    async def generate(self, trip: TripInput, language: Language = Language.EN) -> GeneratedPlan:
        """
        Generate a plan.

        Args:
            trip: Form fields
            language: Output language for the document

        Returns:
            GeneratedPlan with the markdown document

        Raises:
            PlanGenerationError: On timeout, provider error or an empty answer
        """
        messages = [
            {"role": "system", "content": build_system_prompt(language)},
            {"role": "user", "content": build_user_prompt(trip, language)},
        ]

        try:
            content = await self.llm.chat(messages)
        except (APITimeoutError, asyncio.TimeoutError) as e:
            logger.error(f"Plan generation timed out: {e}")
            raise PlanGenerationError("Request timed out. Please try again.") from e
        except APIError as e:
            logger.error(f"Plan generation failed: {e}")
            raise PlanGenerationError(f"LLM provider error: {e.message}") from e

        if not content.strip():
            logger.error("Plan generation returned no content")
            raise PlanGenerationError("No content in response")

        logger.info(f"Generated plan for '{trip.destination}' ({language.value}, {len(content)} chars)")
        return GeneratedPlan(markdown=content, sources=[])


# Global generator instance
plan_generator: Optional[PlanGenerator] = None


def get_plan_generator() -> PlanGenerator:
    """Get or create the global plan generator."""
    global plan_generator
    if plan_generator is None:
        plan_generator = PlanGenerator()
    return plan_generator
