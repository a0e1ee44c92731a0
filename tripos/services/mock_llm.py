"""
Mock LLM Client.
Returns a fixed sample itinerary so the service runs without an API key.
"""
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

DESTINATION_LINE = re.compile(r"^\s*-\s*Destination:\s*(.*)$", re.MULTILINE)

SAMPLE_ITINERARY = """# {destination} Itinerary

## Weather Intelligence

| **Date** | **Condition** | **Temp** | **Rain** | **Strategic Advice** |
|---|---|---|---|---|
| Mar 1 | Sunny | 24/16°C | 10% | Outdoor sights first |
| Mar 2 | Cloudy | 22/15°C | 40% | Keep museums for the afternoon |

**Key Decision:** Outdoor anchors first, indoor fallback ready for the cloudy day.

## TL;DR

- Core theme: old town walks and local food
- Daily pace: *moderate*, 2-3 anchors per day
- Transport: metro day pass, taxis after 22:00

## Day 1
**Old Town | Central Market | Riverside Museum**

| Time Range | Activity | Logistics & Notes |
|---|---|---|
| 09:00-11:00 | Old Town Walk | 15 min metro from hotel |
| 12:00-13:30 | Central Market lunch | **Cash only** stalls |
| 15:00-18:00 | Riverside Museum | Book ahead [Assumption] |

## Day 2
| Time Range | Activity | Logistics & Notes |
|---|---|---|
| 10:00-12:00 | Botanical Garden | Walkable from hotel |
| 14:00-17:00 | Craft District | Flex slot if tired |

## Plan B

> Rain on Day 2: swap the garden for the `City Gallery` pass.

## Booking OS

1. Riverside Museum tickets, book 3 days ahead
2. Dinner cruise, book 1 week ahead

## Packing List

- [ ] Passport
- [ ] Travel adapter
- [x] Comfortable shoes
"""


class MockLLMClient:
    """Deterministic stand-in for a chat completion endpoint."""

    def __init__(self):
        self.model = "mock-demo"

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None
    ) -> str:
        """Answer any request with the sample itinerary for the requested destination."""
        user_msg = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
        match = DESTINATION_LINE.search(user_msg)
        destination = match.group(1).strip() if match else ""
        logger.info(f"Mock LLM generating sample itinerary for '{destination or 'unknown'}'")
        return SAMPLE_ITINERARY.format(destination=destination or "Sample City")
