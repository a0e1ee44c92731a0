"""Tests for the markdown block parser."""
import pytest
from tripos.models.blocks import (
    Blockquote,
    CheckboxItem,
    Heading,
    ListItem,
    Paragraph,
    Table,
)
from tripos.services.markdown_parser import MarkdownBlockParser, split_table_row


@pytest.fixture
def parser():
    return MarkdownBlockParser()


class TestHeadings:
    """Test heading classification."""

    def test_levels_two_to_four(self, parser):
        """##, ### and #### map to levels 2, 3 and 4."""
        blocks = parser.parse("## Two\n### Three\n#### Four")
        assert blocks == [
            Heading(level=2, text="Two"),
            Heading(level=3, text="Three"),
            Heading(level=4, text="Four"),
        ]

    def test_other_hash_counts_are_paragraphs(self, parser):
        """One hash or five hashes fall through to a paragraph."""
        blocks = parser.parse("# Title\n##### Deep")
        assert blocks == [Paragraph(text="# Title"), Paragraph(text="##### Deep")]

    def test_hashes_without_space(self, parser):
        """'##Day' is not a heading."""
        assert parser.parse("##Day") == [Paragraph(text="##Day")]


class TestLists:
    """Test list and checkbox items."""

    def test_checkbox_cases(self, parser):
        """Checked, unchecked and plain bullets."""
        blocks = parser.parse("- [x] Done\n- [ ] Todo\n- Plain")
        assert blocks == [
            CheckboxItem(text="Done", checked=True),
            CheckboxItem(text="Todo", checked=False),
            ListItem(text="Plain", ordered=False),
        ]

    def test_star_bullet(self, parser):
        """'* ' works like '- '."""
        assert parser.parse("* Pack light") == [ListItem(text="Pack light")]

    def test_ordered_item(self, parser):
        """Numbered lines keep their number and drop the prefix."""
        blocks = parser.parse("1. Book tickets\n12. Confirm hotel")
        assert blocks == [
            ListItem(text="Book tickets", ordered=True, number=1),
            ListItem(text="Confirm hotel", ordered=True, number=12),
        ]

    def test_upper_case_x_is_not_checked(self, parser):
        """Only lower-case [x] marks a checkbox."""
        assert parser.parse("- [X] Done") == [ListItem(text="[X] Done")]


class TestTables:
    """Test table grouping."""

    def test_header_separator_and_rows(self, parser):
        """Header, alignment row and N data rows give one table."""
        text = "| A | B |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |\n| 5 | 6 |"
        blocks = parser.parse(text)

        assert len(blocks) == 1
        table = blocks[0]
        assert isinstance(table, Table)
        assert table.header == ["A", "B"]
        assert table.rows == [["1", "2"], ["3", "4"], ["5", "6"]]
        assert table.alignments == ["---", "---"]

    def test_day_one_example(self, parser):
        """Heading followed by a table."""
        text = "## Day 1\n| Time | Activity |\n|---|---|\n| 9am | Museum |"
        assert parser.parse(text) == [
            Heading(level=2, text="Day 1"),
            Table(header=["Time", "Activity"], rows=[["9am", "Museum"]], alignments=["---", "---"]),
        ]

    def test_table_closes_before_next_block(self, parser):
        """A non-pipe line ends the table and is parsed normally."""
        blocks = parser.parse("| A |\n|---|\n| 1 |\nAfter")
        assert isinstance(blocks[0], Table)
        assert blocks[1] == Paragraph(text="After")

    def test_header_only_table(self, parser):
        """A lone pipe line is a table with no rows."""
        blocks = parser.parse("| Only | Header |")
        assert blocks == [Table(header=["Only", "Header"], rows=[], alignments=[])]

    def test_blank_line_splits_tables(self, parser):
        """Two pipe runs separated by a blank line are two tables."""
        blocks = parser.parse("| A |\n| 1 |\n\n| B |\n| 2 |")
        assert [b.header for b in blocks] == [["A"], ["B"]]

    def test_ragged_rows(self, parser):
        """Rows keep their own cell counts."""
        table = parser.parse("| A | B | C |\n| 1 |\n| 1 | 2 | 3 | 4 |")[0]
        assert table.rows == [["1"], ["1", "2", "3", "4"]]

    def test_indented_table_lines(self, parser):
        """Leading whitespace does not stop table detection."""
        table = parser.parse("  | A |\n  | 1 |")[0]
        assert table.header == ["A"]
        assert table.rows == [["1"]]

    def test_split_row_without_boundary_pipes(self):
        """Cells are trimmed and only boundary pipes are dropped."""
        assert split_table_row("| a |  | c |") == ["a", "", "c"]
        assert split_table_row("| a | b") == ["a", "b"]


class TestOtherLines:
    """Test quotes, paragraphs and blanks."""

    def test_blockquote(self, parser):
        """'> ' starts a quote."""
        assert parser.parse("> Rain plan") == [Blockquote(text="Rain plan")]

    def test_blank_lines_produce_nothing(self, parser):
        """Empty and whitespace-only lines are skipped."""
        assert parser.parse("\n   \n") == []

    def test_empty_document(self, parser):
        """Empty input gives no blocks."""
        assert parser.parse("") == []

    def test_lines_are_trimmed(self, parser):
        """Paragraph text is stored trimmed."""
        assert parser.parse("   Walk the old town   ") == [Paragraph(text="Walk the old town")]

    def test_blocks_are_frozen(self, parser):
        """Blocks cannot be modified after parsing."""
        block = parser.parse("Hello")[0]
        with pytest.raises(Exception):
            block.text = "changed"
