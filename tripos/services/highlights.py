"""
Highlight Extractor.
Picks up to four short trip highlights out of a generated itinerary,
used when the caller has no explicit highlight list.
"""
import re

from ..models.trip import MAX_HIGHLIGHTS


# Tried in order; the first pattern found anywhere in the document wins.
DAY_ONE_PATTERNS = [
    re.compile(r"Day\s*1[^\n]*\n([^\n]+)", re.IGNORECASE),
    re.compile(r"第[一1]天[^\n]*\n([^\n]+)"),
    re.compile(r"1\s*日目[^\n]*\n([^\n]+)"),
    re.compile(r"1\s*일차[^\n]*\n([^\n]+)"),
    re.compile(r"(?:Día|Dia|Jour|День)\s*1[^\n]*\n([^\n]+)", re.IGNORECASE),
]

BULLET_PATTERN = re.compile(r"^[-•]\s*(.*)$")
MARKER_CHARS = re.compile(r"[*#\-|]")

DAY_FRAGMENT_LIMIT = 3
DAY_FRAGMENT_MIN, DAY_FRAGMENT_MAX = 3, 29
BULLET_MIN, BULLET_MAX = 5, 39


class HighlightExtractor:
    """Heuristic highlight finder over the raw document text."""

    def extract(self, markdown: str) -> list[str]:
        """
        Extract highlight fragments.

        Args:
            markdown: Full itinerary document

        Returns:
            Zero to four short strings
        """
        highlights = self._from_day_one(markdown)

        if len(highlights) < MAX_HIGHLIGHTS:
            for bullet in self._bullets(markdown):
                if len(highlights) >= MAX_HIGHLIGHTS:
                    break
                if bullet not in highlights:
                    highlights.append(bullet)

        return highlights[:MAX_HIGHLIGHTS]

    def _from_day_one(self, markdown: str) -> list[str]:
        """Fragments of the line following the first 'Day 1' marker."""
        for pattern in DAY_ONE_PATTERNS:
            match = pattern.search(markdown)
            if match:
                break
        else:
            return []

        fragments = [f for f in match.group(1).split("|") if f][:DAY_FRAGMENT_LIMIT]
        highlights = []
        for fragment in fragments:
            cleaned = MARKER_CHARS.sub("", fragment).strip()
            if DAY_FRAGMENT_MIN <= len(cleaned) <= DAY_FRAGMENT_MAX:
                highlights.append(cleaned)
        return highlights

    def _bullets(self, markdown: str):
        """Yield bullet contents of acceptable length, in document order."""
        for line in markdown.split("\n"):
            match = BULLET_PATTERN.match(line.strip())
            if not match:
                continue
            content = match.group(1).strip()
            if BULLET_MIN <= len(content) <= BULLET_MAX:
                yield content


# Global extractor instance
highlight_extractor = HighlightExtractor()
