"""Tests for inline span formatting."""
import pytest
from tripos.models.blocks import StyledRun
from tripos.services.inline_formatter import (
    InlineSpanFormatter,
    render_html,
    strip_markdown,
)


@pytest.fixture
def formatter():
    return InlineSpanFormatter()


class TestFormat:
    """Test run splitting."""

    def test_bold_and_italic_are_independent(self, formatter):
        """'**a** *b*' gives a bold 'a' and an italic 'b'."""
        runs = formatter.format("**a** *b*")
        assert runs == [
            StyledRun(text="a", bold=True),
            StyledRun(text=" "),
            StyledRun(text="b", italic=True),
        ]

    def test_underscore_markers(self, formatter):
        """__x__ and _y_ work like ** and *."""
        runs = formatter.format("__x__ _y_")
        assert runs[0] == StyledRun(text="x", bold=True)
        assert runs[2] == StyledRun(text="y", italic=True)

    def test_italic_nests_inside_bold(self, formatter):
        """Italic inside a bold span keeps the bold flag."""
        runs = formatter.format("**see *this* now**")
        assert runs == [
            StyledRun(text="see ", bold=True),
            StyledRun(text="this", bold=True, italic=True),
            StyledRun(text=" now", bold=True),
        ]

    def test_inline_code(self, formatter):
        """Backticks mark code and are removed."""
        runs = formatter.format("Take `Line 3` north")
        assert runs[1] == StyledRun(text="Line 3", code=True)

    def test_annotation_keeps_brackets(self, formatter):
        """[..] spans are annotated with their brackets kept."""
        runs = formatter.format("Museum [Assumption]")
        assert runs == [
            StyledRun(text="Museum "),
            StyledRun(text="[Assumption]", annotated=True),
        ]

    def test_annotation_not_applied_inside_code(self, formatter):
        """Bracketed text inside code stays plain code."""
        runs = formatter.format("`[a]`")
        assert runs == [StyledRun(text="[a]", code=True)]

    @pytest.mark.parametrize("text,code", [
        ("`my_var_name`", "my_var_name"),
        ("`__init__`", "__init__"),
        ("`*.md`", "*.md"),
    ])
    def test_emphasis_markers_inside_code(self, formatter, text, code):
        """Underscores and asterisks inside backticks stay literal code."""
        assert formatter.format(text) == [StyledRun(text=code, code=True)]

    def test_italic_beside_code(self, formatter):
        """Italic outside a code span still applies."""
        runs = formatter.format("_note_ `a_b`")
        assert runs == [
            StyledRun(text="note", italic=True),
            StyledRun(text=" "),
            StyledRun(text="a_b", code=True),
        ]

    def test_bold_around_code(self, formatter):
        """Bold wrapping a whole code span keeps both styles."""
        runs = formatter.format("**take `Line 3` north**")
        assert runs == [
            StyledRun(text="take ", bold=True),
            StyledRun(text="Line 3", bold=True, code=True),
            StyledRun(text=" north", bold=True),
        ]

    def test_line_breaks(self, formatter):
        """<br>, <br/> and <BR /> become line-break runs."""
        runs = formatter.format("a<br>b<br/>c<BR />d")
        assert [r.text for r in runs] == ["a", "\n", "b", "\n", "c", "\n", "d"]
        assert [r.line_break for r in runs] == [False, True, False, True, False, True, False]

    def test_runs_reconstruct_visible_text(self, formatter):
        """Joined runs equal the text with markers removed."""
        runs = formatter.format("**Day 1**: *Old Town* walk [2h]")
        assert "".join(r.text for r in runs) == "Day 1: Old Town walk [2h]"

    def test_empty_text(self, formatter):
        """Empty input gives no runs."""
        assert formatter.format("") == []

    def test_plain_text(self, formatter):
        """Text without markers is one unstyled run."""
        assert formatter.format("Just walking") == [StyledRun(text="Just walking")]


class TestHtml:
    """Test the HTML backend."""

    def test_literal_text_is_escaped(self, formatter):
        """Angle brackets and ampersands in the text never become markup."""
        html = formatter.to_html("<script>alert(1)</script> & **x**")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&amp;" in html
        assert html.endswith("<strong>x</strong>")

    def test_markup_from_flags(self):
        """Each flag maps to its own tag."""
        runs = [
            StyledRun(text="a", bold=True, italic=True),
            StyledRun(text="\n", line_break=True),
            StyledRun(text="b", code=True),
            StyledRun(text="[c]", annotated=True),
        ]
        assert render_html(runs) == (
            "<strong><em>a</em></strong><br />"
            "<code>b</code>"
            '<span class="annotation">[c]</span>'
        )


class TestStripMarkdown:
    """Test marker stripping for card text."""

    def test_emphasis_removed(self):
        """Bold, italic, strike and code markers are dropped."""
        assert strip_markdown("**Fushimi** *Inari* ~~old~~ `JR`") == "Fushimi Inari old JR"

    def test_heading_and_bullet_prefixes(self):
        """Heading hashes and list prefixes are dropped."""
        assert strip_markdown("## Gion") == "Gion"
        assert strip_markdown("- Tea ceremony") == "Tea ceremony"
        assert strip_markdown("2. Bamboo grove") == "Bamboo grove"

    def test_links_keep_text(self):
        """[text](url) keeps the text."""
        assert strip_markdown("[Kyoto](https://example.com)") == "Kyoto"
