"""
Inline Span Formatter.
Turns one line of itinerary text into styled runs, in a fixed precedence:
bold, then italic, then inline code, then [annotation] spans.

Bold and italic markers inside a backtick span are left alone, so
`my_var_name` stays one code run.
"""
import html
import re
from typing import Callable, Optional

from ..models.blocks import StyledRun


LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
BOLD_PATTERN = re.compile(r"(\*\*|__)(.*?)\1")
ITALIC_PATTERN = re.compile(r"(\*|_)(.*?)\1")
CODE_PATTERN = re.compile(r"`([^`]+)`")
ANNOTATION_PATTERN = re.compile(r"\[(.*?)\]")

# Strip-only rules used where text is drawn without styling (share card).
_STRIP_RULES = [
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"#{1,6}\s*"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^\s*[-*+]\s*", re.MULTILINE), ""),
    (re.compile(r"^\s*\d+\.\s*", re.MULTILINE), ""),
]


def _split_line_breaks(text: str) -> list[StyledRun]:
    runs = []
    pos = 0
    for match in LINE_BREAK_PATTERN.finditer(text):
        if match.start() > pos:
            runs.append(StyledRun(text=text[pos:match.start()]))
        runs.append(StyledRun(text="\n", line_break=True))
        pos = match.end()
    if pos < len(text):
        runs.append(StyledRun(text=text[pos:]))
    return runs


def _apply_rule(
    runs: list[StyledRun],
    pattern: re.Pattern,
    flag: str,
    keep_delimiters: bool = False,
    skip: Callable[[StyledRun], bool] = lambda run: False,
    protect: Optional[re.Pattern] = None,
) -> list[StyledRun]:
    """
    Split every run on `pattern`, marking matched content with `flag`.

    Matches never cross run boundaries, so spans produced by an earlier rule
    stay intact. Matches with a delimiter inside a `protect` span are ignored. New runs
    inherit the flags of the run they came from.
    """
    result = []
    for run in runs:
        if run.line_break or skip(run):
            result.append(run)
            continue

        guarded = [m.span() for m in protect.finditer(run.text)] if protect else []
        pos = search = 0
        while True:
            match = pattern.search(run.text, search)
            if match is None:
                break
            # a delimiter sitting inside a protected span
            inside = next(
                (end for start, end in guarded
                 if start <= match.start() < end or start < match.end() <= end),
                None
            )
            if inside is not None:
                search = inside
                continue

            if match.start() > pos:
                result.append(run.model_copy(update={"text": run.text[pos:match.start()]}))
            content = match.group(0) if keep_delimiters else match.group(match.lastindex)
            if content:
                result.append(run.model_copy(update={"text": content, flag: True}))
            pos = search = match.end()
        if pos < len(run.text):
            result.append(run.model_copy(update={"text": run.text[pos:]}))
    return result


class InlineSpanFormatter:
    """Formats a single line or table cell into styled runs."""

    def format(self, text: str) -> list[StyledRun]:
        """
        Convert a line into styled runs.

        Args:
            text: Raw line, may contain <br> tags

        Returns:
            Ordered runs whose texts concatenate to the visible string
        """
        runs = _split_line_breaks(text)
        runs = _apply_rule(runs, BOLD_PATTERN, "bold", protect=CODE_PATTERN)
        runs = _apply_rule(runs, ITALIC_PATTERN, "italic", protect=CODE_PATTERN)
        runs = _apply_rule(runs, CODE_PATTERN, "code")
        runs = _apply_rule(
            runs,
            ANNOTATION_PATTERN,
            "annotated",
            keep_delimiters=True,
            skip=lambda run: run.code,
        )
        return runs

    def to_html(self, text: str) -> str:
        """Format a line straight to escaped HTML."""
        return render_html(self.format(text))


def render_html(runs: list[StyledRun]) -> str:
    """
    Render runs as HTML.

    All run text is escaped; markup only comes from the run flags.
    """
    parts = []
    for run in runs:
        if run.line_break:
            parts.append("<br />")
            continue
        fragment = html.escape(run.text)
        if run.code:
            fragment = f"<code>{fragment}</code>"
        if run.annotated:
            fragment = f'<span class="annotation">{fragment}</span>'
        if run.italic:
            fragment = f"<em>{fragment}</em>"
        if run.bold:
            fragment = f"<strong>{fragment}</strong>"
        parts.append(fragment)
    return "".join(parts)


def strip_markdown(text: str) -> str:
    """Remove markdown markers without styling anything."""
    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


# Global formatter instance
inline_formatter = InlineSpanFormatter()
